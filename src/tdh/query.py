#!/usr/bin/env python3
"""
Filter, sort and title selection over the task collection.

Every view is a list of ``(number, task)`` pairs where ``number`` is the
task's 1-based position in the full collection, the number every command
uses to address a task.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .models import (
    DueFilter,
    Priority,
    RecurrenceFilter,
    SortKey,
    StatusFilter,
    Task,
)

IndexedTask = Tuple[int, Task]


@dataclass(frozen=True)
class FilterCriteria:
    """
    Selection and ordering options for a task view.

    Attributes
    ----------
    status : StatusFilter
        Completion selector.
    priority : Optional[Priority]
        Exact priority match.
    due : Optional[DueFilter]
        Due-date selector.
    tag : Optional[str]
        Exact tag match.
    project : Optional[str]
        Case-insensitive project match.
    recurrence : Optional[RecurrenceFilter]
        Recurrence selector.
    sort : Optional[SortKey]
        Sort key applied after filtering.
    """

    status: StatusFilter = StatusFilter.ALL
    priority: Optional[Priority] = None
    due: Optional[DueFilter] = None
    tag: Optional[str] = None
    project: Optional[str] = None
    recurrence: Optional[RecurrenceFilter] = None
    sort: Optional[SortKey] = None


def index_tasks(tasks: Sequence[Task]) -> List[IndexedTask]:
    """
    Pair each task with its 1-based position.

    Examples
    --------
    >>> index_tasks([])
    []
    """
    return [(number, task) for number, task in enumerate(tasks, start=1)]


def filter_view(
    view: List[IndexedTask],
    criteria: FilterCriteria,
    today: date,
) -> List[IndexedTask]:
    """
    Apply the active filters in order.

    Stages run as status, priority, due, tag, project, then recurrence.
    """
    view = [pair for pair in view if pair[1].matches_status(criteria.status)]
    if criteria.priority is not None:
        view = [pair for pair in view if pair[1].priority is criteria.priority]
    if criteria.due is not None:
        view = [pair for pair in view if pair[1].matches_due(criteria.due, today)]
    if criteria.tag is not None:
        view = [pair for pair in view if criteria.tag in pair[1].tags]
    if criteria.project is not None:
        view = [pair for pair in view if pair[1].matches_project(criteria.project)]
    if criteria.recurrence is not None:
        view = [pair for pair in view if pair[1].matches_recurrence(criteria.recurrence)]
    return view


def _due_sort_key(pair: IndexedTask) -> Tuple[int, date]:
    due = pair[1].due_date
    if due is None:
        return (1, date.min)
    return (0, due)


def sort_view(view: List[IndexedTask], key: Optional[SortKey]) -> List[IndexedTask]:
    """
    Stable sort of a view; ties keep their relative order.

    Parameters
    ----------
    view : List[IndexedTask]
        View to sort.
    key : Optional[SortKey]
        Sort key, or None to keep collection order.

    Returns
    -------
    List[IndexedTask]
        Sorted copy of the view.
    """
    if key is None:
        return list(view)
    if key is SortKey.PRIORITY:
        return sorted(view, key=lambda pair: pair[1].priority.order)
    if key is SortKey.DUE:
        return sorted(view, key=_due_sort_key)
    if key is SortKey.CREATED:
        return sorted(view, key=lambda pair: pair[1].created_at)
    raise ValueError(f"Unknown sort key: {key!r}")


def apply(
    tasks: Sequence[Task],
    criteria: FilterCriteria,
    today: date,
) -> List[IndexedTask]:
    """
    Build the numbered, filtered and sorted view of a collection.

    Parameters
    ----------
    tasks : Sequence[Task]
        Full collection.
    criteria : FilterCriteria
        Filters and sort key.
    today : date
        Reference date for due-date filters.

    Returns
    -------
    List[IndexedTask]
        Matching ``(number, task)`` pairs; empty when nothing matches.

    Examples
    --------
    >>> tasks = [Task(id=i, text=f"t{i}", created_at=date(2026, 2, 1),
    ...               completed=i % 2 == 0) for i in range(1, 6)]
    >>> [n for n, _ in apply(tasks, FilterCriteria(status=StatusFilter.PENDING),
    ...                      date(2026, 2, 1))]
    [1, 3, 5]
    """
    view = filter_view(index_tasks(tasks), criteria, today)
    return sort_view(view, criteria.sort)


def search(
    tasks: Sequence[Task],
    query: str,
    status: StatusFilter = StatusFilter.ALL,
    tag: Optional[str] = None,
    project: Optional[str] = None,
) -> List[IndexedTask]:
    """
    Case-insensitive substring search over task text.

    Examples
    --------
    >>> tasks = [Task(id=1, text="Buy Milk", created_at=date(2026, 2, 1)),
    ...          Task(id=2, text="Call mom", created_at=date(2026, 2, 1))]
    >>> [n for n, _ in search(tasks, "milk")]
    [1]
    """
    needle = query.lower()
    view = [pair for pair in index_tasks(tasks) if needle in pair[1].text.lower()]
    view = [pair for pair in view if pair[1].matches_status(status)]
    if tag is not None:
        view = [pair for pair in view if tag in pair[1].tags]
    if project is not None:
        view = [pair for pair in view if pair[1].matches_project(project)]
    return view


def collect_tags(tasks: Sequence[Task]) -> List[Tuple[str, int]]:
    """
    Return each distinct tag with the number of tasks carrying it.

    Examples
    --------
    >>> tasks = [Task(id=1, text="a", created_at=date(2026, 2, 1), tags=["work"]),
    ...          Task(id=2, text="b", created_at=date(2026, 2, 1), tags=["home", "work"])]
    >>> collect_tags(tasks)
    [('home', 1), ('work', 2)]
    """
    counts: Dict[str, int] = {}
    for task in tasks:
        for tag in dict.fromkeys(task.tags):
            counts[tag] = counts.get(tag, 0) + 1
    return sorted(counts.items())


def collect_projects(tasks: Sequence[Task]) -> List[Tuple[str, int, int]]:
    """
    Return each distinct project with its pending and completed task counts.

    Projects that differ only in case are counted together under the first
    spelling seen.

    Examples
    --------
    >>> tasks = [Task(id=1, text="a", created_at=date(2026, 2, 1), project="Home"),
    ...          Task(id=2, text="b", created_at=date(2026, 2, 1), project="home",
    ...               completed=True),
    ...          Task(id=3, text="c", created_at=date(2026, 2, 1))]
    >>> collect_projects(tasks)
    [('Home', 1, 1)]
    """
    names: Dict[str, str] = {}
    counts: Dict[str, List[int]] = {}
    for task in tasks:
        if task.project is None:
            continue
        key = task.project.lower()
        names.setdefault(key, task.project)
        pending_done = counts.setdefault(key, [0, 0])
        pending_done[1 if task.completed else 0] += 1
    return sorted(
        ((names[key], pending, done) for key, (pending, done) in counts.items()),
        key=lambda item: item[0].lower(),
    )


def _recurrence_title(status: StatusFilter, selector: RecurrenceFilter) -> str:
    if selector is RecurrenceFilter.DAILY:
        noun = "daily recurring tasks"
    elif selector is RecurrenceFilter.WEEKLY:
        noun = "weekly recurring tasks"
    elif selector is RecurrenceFilter.MONTHLY:
        noun = "monthly recurring tasks"
    elif selector is RecurrenceFilter.RECURRING:
        noun = "recurring tasks"
    elif selector is RecurrenceFilter.NON_RECURRING:
        noun = "non-recurring tasks"
    else:
        raise ValueError(f"Unknown recurrence filter: {selector!r}")

    if status is StatusFilter.PENDING:
        return f"Pending {noun}"
    if status is StatusFilter.DONE:
        return f"Completed {noun}"
    if status is StatusFilter.ALL:
        return noun[0].upper() + noun[1:]
    raise ValueError(f"Unknown status filter: {status!r}")


def _status_word(status: StatusFilter) -> Optional[str]:
    if status is StatusFilter.ALL:
        return None
    if status is StatusFilter.PENDING:
        return "pending"
    if status is StatusFilter.DONE:
        return "completed"
    raise ValueError(f"Unknown status filter: {status!r}")


def _due_phrase(due: Optional[DueFilter]) -> Tuple[Optional[str], Optional[str]]:
    # (adjective before "tasks", phrase after "tasks")
    if due is None:
        return None, None
    if due is DueFilter.OVERDUE:
        return "overdue", None
    if due is DueFilter.SOON:
        return None, "due soon"
    if due is DueFilter.WITH_DUE:
        return None, "with due date"
    if due is DueFilter.NO_DUE:
        return None, "without due date"
    raise ValueError(f"Unknown due filter: {due!r}")


def _compose_title(
    status: StatusFilter,
    priority: Optional[Priority],
    due: Optional[DueFilter],
) -> str:
    adjective, phrase = _due_phrase(due)
    words: List[str] = []
    if priority is not None:
        words.append(f"{priority.label} priority")
    status_word = _status_word(status)
    if status_word:
        words.append(status_word)
    if adjective:
        words.append(adjective)
    words.append("tasks")
    if phrase:
        words.append(phrase)
    title = " ".join(words)
    return title[0].upper() + title[1:]


def determine_title(criteria: FilterCriteria) -> str:
    """
    Describe the active filter combination.

    Parameters
    ----------
    criteria : FilterCriteria
        Active criteria; the sort key does not affect the title.
        A project selector replaces every other part of the title except
        the tag suffix.

    Returns
    -------
    str
        Human-readable title, "Tasks" when no filter is active.

    Examples
    --------
    >>> determine_title(FilterCriteria())
    'Tasks'
    >>> determine_title(FilterCriteria(status=StatusFilter.PENDING, priority=Priority.HIGH))
    'High priority pending tasks'
    >>> determine_title(FilterCriteria(status=StatusFilter.PENDING, priority=Priority.HIGH,
    ...                                due=DueFilter.SOON))
    'High priority pending tasks due soon'
    >>> determine_title(FilterCriteria(due=DueFilter.OVERDUE))
    'Overdue tasks'
    >>> determine_title(FilterCriteria(status=StatusFilter.DONE,
    ...                                recurrence=RecurrenceFilter.RECURRING))
    'Completed recurring tasks'
    >>> determine_title(FilterCriteria(status=StatusFilter.PENDING, tag="work"))
    'Pending tasks tagged "work"'
    >>> determine_title(FilterCriteria(status=StatusFilter.PENDING, project="Backend"))
    'Tasks in project "Backend"'
    """
    if criteria.project is not None:
        title = f'Tasks in project "{criteria.project}"'
    elif criteria.recurrence is not None:
        title = _recurrence_title(criteria.status, criteria.recurrence)
    else:
        title = _compose_title(criteria.status, criteria.priority, criteria.due)
    if criteria.tag is not None:
        title = f'{title} tagged "{criteria.tag}"'
    return title
