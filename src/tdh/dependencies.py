#!/usr/bin/env python3
"""
Task dependency links: lookup, blocking checks and cycle detection.

Links are stored as task ids in ``Task.depends_on``; commands address
tasks by their 1-based numbers and convert at this boundary.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .models import Task
from .query import IndexedTask, index_tasks
from .validation import validate_task_number


def locate_task(tasks: Sequence[Task], task_id: int) -> Optional[IndexedTask]:
    """
    Find a task by id together with its current number.

    Examples
    --------
    >>> from datetime import date
    >>> tasks = [Task(id=7, text="a", created_at=date(2026, 2, 1))]
    >>> locate_task(tasks, 7)[0]
    1
    >>> locate_task(tasks, 8) is None
    True
    """
    for number, task in index_tasks(tasks):
        if task.id == task_id:
            return number, task
    return None


def blocking_dependencies(tasks: Sequence[Task], task: Task) -> List[IndexedTask]:
    """
    Return the pending tasks that ``task`` still waits on.

    Ids that no longer resolve to a task do not block.
    """
    blockers: List[IndexedTask] = []
    for dep_id in task.depends_on:
        found = locate_task(tasks, dep_id)
        if found is not None and not found[1].completed:
            blockers.append(found)
    return blockers


def dependents(tasks: Sequence[Task], task: Task) -> List[IndexedTask]:
    """
    Return the tasks that list ``task`` as a dependency.
    """
    return [pair for pair in index_tasks(tasks) if task.id in pair[1].depends_on]


def is_blocked(tasks: Sequence[Task], task: Task) -> bool:
    return not task.completed and bool(blocking_dependencies(tasks, task))


def depends_transitively(tasks: Sequence[Task], start_id: int, target_id: int) -> bool:
    """
    Report whether ``start_id`` reaches ``target_id`` through dependency links.

    Parameters
    ----------
    tasks : Sequence[Task]
        Full collection.
    start_id : int
        Task id to walk from.
    target_id : int
        Task id to look for.

    Returns
    -------
    bool
        True when a chain of ``depends_on`` links leads to the target.

    Examples
    --------
    >>> from datetime import date
    >>> tasks = [Task(id=1, text="a", created_at=date(2026, 2, 1), depends_on=[2]),
    ...          Task(id=2, text="b", created_at=date(2026, 2, 1), depends_on=[3]),
    ...          Task(id=3, text="c", created_at=date(2026, 2, 1))]
    >>> depends_transitively(tasks, 1, 3)
    True
    >>> depends_transitively(tasks, 3, 1)
    False
    """
    links: Dict[int, List[int]] = {task.id: task.depends_on for task in tasks}
    visited = set()
    stack = [start_id]
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        for neighbor in links.get(node, []):
            if neighbor == target_id:
                return True
            if neighbor not in visited:
                stack.append(neighbor)
    return False


def resolve_dependency_ids(
    tasks: Sequence[Task],
    numbers: Iterable[int],
    own_number: int,
) -> List[int]:
    """
    Convert dependency task numbers to ids, dropping repeats.

    Parameters
    ----------
    tasks : Sequence[Task]
        Collection the numbers refer to.
    numbers : Iterable[int]
        1-based numbers of the tasks depended on.
    own_number : int
        Number of the dependent task, which may be ``len(tasks) + 1`` for a
        task that is being added.

    Returns
    -------
    List[int]
        Ids in input order.

    Raises
    ------
    ValueError
        If a number is invalid or names the dependent task itself.
    """
    ids: List[int] = []
    for number in numbers:
        if number == own_number:
            raise ValueError(f"Task #{own_number} cannot depend on itself.")
        validate_task_number(number, len(tasks))
        dep_id = tasks[number - 1].id
        if dep_id not in ids:
            ids.append(dep_id)
    return ids


def add_dependencies(tasks: Sequence[Task], number: int, dep_numbers: Iterable[int]) -> List[int]:
    """
    Link task ``number`` to each task in ``dep_numbers``.

    Returns
    -------
    List[int]
        Ids that were added.

    Raises
    ------
    ValueError
        If a link already exists or would close a dependency cycle; the
        task is left unchanged.
    """
    validate_task_number(number, len(tasks))
    task = tasks[number - 1]
    added = resolve_dependency_ids(tasks, dep_numbers, number)
    for dep_id in added:
        dep_number = locate_task(tasks, dep_id)[0]
        if dep_id in task.depends_on:
            raise ValueError(f"Task #{number} already depends on task #{dep_number}.")
        if depends_transitively(tasks, dep_id, task.id):
            raise ValueError(
                f"Dependency cycle detected: task #{dep_number} already depends "
                f"on task #{number}."
            )
    task.depends_on.extend(added)
    return added


def remove_dependencies(
    tasks: Sequence[Task],
    number: int,
    dep_numbers: Iterable[int],
) -> List[int]:
    """
    Unlink task ``number`` from each task in ``dep_numbers``.

    Raises
    ------
    ValueError
        If a number is invalid or is not a dependency of the task.
    """
    validate_task_number(number, len(tasks))
    task = tasks[number - 1]
    removed: List[int] = []
    for dep_number in dep_numbers:
        validate_task_number(dep_number, len(tasks))
        dep_id = tasks[dep_number - 1].id
        if dep_id not in task.depends_on:
            raise ValueError(f"Task #{number} does not depend on task #{dep_number}.")
        if dep_id not in removed:
            removed.append(dep_id)
    task.depends_on = [dep_id for dep_id in task.depends_on if dep_id not in removed]
    return removed


def drop_references(tasks: Iterable[Task], removed_ids: Iterable[int]) -> None:
    """
    Remove links to deleted tasks so their ids can be allocated again.
    """
    gone = set(removed_ids)
    for task in tasks:
        if any(dep_id in gone for dep_id in task.depends_on):
            task.depends_on = [dep_id for dep_id in task.depends_on if dep_id not in gone]


def describe_tasks(pairs: Sequence[IndexedTask]) -> str:
    """
    Join numbered tasks for messages.

    Examples
    --------
    >>> from datetime import date
    >>> describe_tasks([(2, Task(id=5, text="Write draft", created_at=date(2026, 2, 1)))])
    '#2 "Write draft"'
    """
    return ", ".join(f'#{number} "{task.text}"' for number, task in pairs)
