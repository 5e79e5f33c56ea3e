#!/usr/bin/env python3
"""
Next-occurrence arithmetic and successor generation for recurring tasks.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Sequence

from .dependencies import blocking_dependencies, describe_tasks
from .models import Recurrence, Task
from .validation import validate_task_number


class SuccessorOutcome(Enum):
    NOT_RECURRING = "not-recurring"
    CREATED = "created"
    ALREADY_EXISTS = "already-exists"


class RecurrenceAssignment(Enum):
    """
    Result of assigning a recurrence pattern to a task.
    """

    REJECTED_NO_DUE_DATE = "rejected-no-due-date"
    SET = "set"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class SuccessorResult:
    """
    Outcome of the successor step that follows a completion.

    Attributes
    ----------
    outcome : SuccessorOutcome
        What happened.
    successor : Optional[Task]
        The generated task when ``outcome`` is CREATED.
    number : Optional[int]
        1-based position of the generated task in the collection.
    next_due : Optional[date]
        Computed next due date for recurring sources.
    """

    outcome: SuccessorOutcome
    successor: Optional[Task] = None
    number: Optional[int] = None
    next_due: Optional[date] = None


def add_months(current: date, months: int) -> date:
    """
    Move a date forward by whole months, clamping to the month's last day.

    Parameters
    ----------
    current : date
        Start date.
    months : int
        Number of months to add (non-negative).

    Returns
    -------
    date
        Same day-of-month in the target month, or its last day.

    Examples
    --------
    >>> add_months(date(2026, 1, 31), 1)
    datetime.date(2026, 2, 28)
    >>> add_months(date(2026, 12, 15), 1)
    datetime.date(2027, 1, 15)
    """
    month_index = current.month - 1 + months
    year = current.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(current.day, last_day))


def next_due_date(current: date, pattern: Recurrence) -> date:
    """
    Compute the next occurrence date for a recurrence pattern.

    Parameters
    ----------
    current : date
        Current due date.
    pattern : Recurrence
        Recurrence pattern.

    Returns
    -------
    date
        Next due date.

    Raises
    ------
    ValueError
        If ``pattern`` is not a known recurrence.

    Examples
    --------
    >>> next_due_date(date(2026, 2, 3), Recurrence.DAILY)
    datetime.date(2026, 2, 4)
    >>> next_due_date(date(2026, 2, 3), Recurrence.WEEKLY)
    datetime.date(2026, 2, 10)
    >>> next_due_date(date(2024, 1, 31), Recurrence.MONTHLY)
    datetime.date(2024, 2, 29)
    """
    if pattern is Recurrence.DAILY:
        return current + timedelta(days=1)
    if pattern is Recurrence.WEEKLY:
        return current + timedelta(days=7)
    if pattern is Recurrence.MONTHLY:
        return add_months(current, 1)
    raise ValueError(f"Unknown recurrence pattern: {pattern!r}")


def create_successor(task: Task, new_id: int, today: date) -> Optional[Task]:
    """
    Build the next occurrence of a recurring task.

    Parameters
    ----------
    task : Task
        Task that was just completed.
    new_id : int
        Id for the new task.
    today : date
        Creation date for the new task.

    Returns
    -------
    Optional[Task]
        The successor, or None when the task has no recurrence or no due date.
        Dependency links are not carried over.

    Examples
    --------
    >>> source = Task(id=4, text="Stand-up", created_at=date(2026, 1, 1),
    ...               due_date=date(2026, 2, 1), recurrence=Recurrence.DAILY)
    >>> successor = create_successor(source, 9, date(2026, 2, 1))
    >>> (successor.id, successor.parent_id, successor.due_date)
    (9, 4, datetime.date(2026, 2, 2))
    """
    if task.recurrence is None or task.due_date is None:
        return None
    return Task(
        id=new_id,
        text=task.text,
        created_at=today,
        completed=False,
        priority=task.priority,
        tags=list(task.tags),
        due_date=next_due_date(task.due_date, task.recurrence),
        recurrence=task.recurrence,
        parent_id=task.id,
        project=task.project,
    )


def find_successor_by_parent(tasks: Sequence[Task], source_id: int) -> Optional[Task]:
    """
    Return a task generated from ``source_id``, if any.
    """
    for task in tasks:
        if task.parent_id == source_id:
            return task
    return None


def find_successor_by_text(
    tasks: Sequence[Task],
    text: str,
    due_date: date,
) -> Optional[Task]:
    """
    Return an open task with the same text due on ``due_date``, if any.

    Covers collections written before tasks carried ``parent_id``.
    """
    for task in tasks:
        if not task.completed and task.text == text and task.due_date == due_date:
            return task
    return None


def find_existing_successor(
    tasks: Sequence[Task],
    source: Task,
    next_due: date,
) -> Optional[Task]:
    """
    Look up an already generated successor of ``source``.

    The ``parent_id`` link is checked first; the text and due date match is
    used only when no linked task exists.

    Parameters
    ----------
    tasks : Sequence[Task]
        Current collection.
    source : Task
        Completed recurring task.
    next_due : date
        Due date its successor would get.

    Returns
    -------
    Optional[Task]
        Matching task, or None.
    """
    linked = find_successor_by_parent(tasks, source.id)
    if linked is not None:
        return linked
    return find_successor_by_text(tasks, source.text, next_due)


def next_task_id(tasks: Sequence[Task]) -> int:
    """
    Allocate an id one greater than any id in the collection.

    Examples
    --------
    >>> next_task_id([])
    1
    """
    return max((task.id for task in tasks), default=0) + 1


def spawn_successor(tasks: List[Task], source: Task, today: date) -> SuccessorResult:
    """
    Append the next occurrence of ``source`` unless one already exists.

    Parameters
    ----------
    tasks : List[Task]
        Collection, extended in place when a successor is created.
    source : Task
        Completed task.
    today : date
        Current date.

    Returns
    -------
    SuccessorResult
        NOT_RECURRING, CREATED or ALREADY_EXISTS.
    """
    successor = create_successor(source, next_task_id(tasks), today)
    if successor is None:
        return SuccessorResult(SuccessorOutcome.NOT_RECURRING)
    if find_existing_successor(tasks, source, successor.due_date) is not None:
        return SuccessorResult(SuccessorOutcome.ALREADY_EXISTS, next_due=successor.due_date)
    tasks.append(successor)
    return SuccessorResult(
        SuccessorOutcome.CREATED,
        successor=successor,
        number=len(tasks),
        next_due=successor.due_date,
    )


def complete_task(tasks: List[Task], number: int, today: date) -> SuccessorResult:
    """
    Mark task ``number`` done and generate its successor when recurring.

    Parameters
    ----------
    tasks : List[Task]
        Collection, mutated in place.
    number : int
        1-based task number.
    today : date
        Current date.

    Returns
    -------
    SuccessorResult
        Successor step outcome.

    Raises
    ------
    ValueError
        If the number is invalid or the task cannot be completed yet.
    """
    validate_task_number(number, len(tasks))
    task = tasks[number - 1]
    if task.completed:
        raise ValueError(f"Task #{number} is already marked as completed.")
    blockers = blocking_dependencies(tasks, task)
    if blockers:
        raise ValueError(
            f"Task #{number} is blocked by pending dependencies: {describe_tasks(blockers)}"
        )
    task.mark_done(today)
    return spawn_successor(tasks, task, today)


def assign_recurrence(task: Task, pattern: Recurrence) -> RecurrenceAssignment:
    """
    Set a recurrence pattern, refusing tasks without a due date.

    Parameters
    ----------
    task : Task
        Task to update in place.
    pattern : Recurrence
        New pattern.

    Returns
    -------
    RecurrenceAssignment
        REJECTED_NO_DUE_DATE leaves the task untouched.

    Examples
    --------
    >>> task = Task(id=1, text="Backup", created_at=date(2026, 2, 1))
    >>> assign_recurrence(task, Recurrence.WEEKLY).name
    'REJECTED_NO_DUE_DATE'
    >>> task.recurrence is None
    True
    """
    if task.due_date is None:
        return RecurrenceAssignment.REJECTED_NO_DUE_DATE
    previous = task.recurrence
    if previous is pattern:
        return RecurrenceAssignment.UNCHANGED
    task.recurrence = pattern
    if previous is None:
        return RecurrenceAssignment.SET
    return RecurrenceAssignment.UPDATED


def clear_recurrence(task: Task) -> Optional[Recurrence]:
    """
    Remove the recurrence pattern and return the one that was set.
    """
    previous = task.recurrence
    task.recurrence = None
    return previous
