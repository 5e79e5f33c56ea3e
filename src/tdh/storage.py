#!/usr/bin/env python3
"""
Read and write the task collection as a JSON array.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .dates import DATE_FORMAT, format_date
from .models import Priority, Recurrence, Task


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    return datetime.strptime(str(value), DATE_FORMAT).date()


def task_from_dict(payload: Dict[str, Any], position: int, today: date) -> Task:
    """
    Build a Task from its stored form.

    Fields added over time (``id``, ``tags``, ``due_date``, ``recurrence``,
    ``parent_id``, ``completed_at``, ``project``, ``depends_on``) default to
    empty values when missing.

    Parameters
    ----------
    payload : Dict[str, Any]
        Stored task object.
    position : int
        1-based position in the file, used as the id for older data.
    today : date
        Fallback creation date.

    Returns
    -------
    Task
        Parsed task.

    Raises
    ------
    ValueError
        If the stored item is not a JSON object.

    Examples
    --------
    >>> task = task_from_dict({"text": "Old", "completed": False, "priority": "low",
    ...                        "created_at": "2025-01-02"}, 3, date(2026, 2, 1))
    >>> (task.id, task.priority.value, task.tags, task.recurrence)
    (3, 'low', [], None)
    """
    if not isinstance(payload, dict):
        raise ValueError(f"task {position} is not a JSON object")
    recurrence = payload.get("recurrence")
    project = payload.get("project")
    parent_id = payload.get("parent_id")
    created_at = _parse_date(payload.get("created_at")) or today
    return Task(
        id=int(payload.get("id") or position),
        text=str(payload["text"]),
        created_at=created_at,
        completed=bool(payload.get("completed", False)),
        priority=Priority(payload.get("priority") or Priority.MEDIUM.value),
        tags=[str(tag) for tag in payload.get("tags") or []],
        due_date=_parse_date(payload.get("due_date")),
        recurrence=Recurrence(recurrence) if recurrence else None,
        parent_id=int(parent_id) if parent_id is not None else None,
        completed_at=_parse_date(payload.get("completed_at")),
        project=str(project) if project else None,
        depends_on=[int(task_id) for task_id in payload.get("depends_on") or []],
    )


def task_to_dict(task: Task) -> Dict[str, Any]:
    """
    Convert a Task to its stored form; empty optional fields are omitted.

    Examples
    --------
    >>> task_to_dict(Task(id=1, text="New", created_at=date(2026, 2, 1)))
    {'id': 1, 'text': 'New', 'completed': False, 'priority': 'medium', 'tags': [], 'due_date': None, 'created_at': '2026-02-01'}
    """
    payload: Dict[str, Any] = {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "priority": task.priority.value,
        "tags": list(task.tags),
        "due_date": format_date(task.due_date) if task.due_date else None,
        "created_at": format_date(task.created_at),
    }
    if task.recurrence is not None:
        payload["recurrence"] = task.recurrence.value
    if task.parent_id is not None:
        payload["parent_id"] = task.parent_id
    if task.completed_at is not None:
        payload["completed_at"] = format_date(task.completed_at)
    if task.project is not None:
        payload["project"] = task.project
    if task.depends_on:
        payload["depends_on"] = list(task.depends_on)
    return payload


def load_tasks(path: Path, today: Optional[date] = None) -> List[Task]:
    """
    Load the full task collection.

    Parameters
    ----------
    path : Path
        Data file path.
    today : Optional[date], optional
        Fallback creation date for records without one (default: today).

    Returns
    -------
    List[Task]
        Tasks in file order; empty when the file does not exist.

    Raises
    ------
    ValueError
        If the file is not a valid task list.
    """
    if not path.exists():
        return []
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return []
    today = today or date.today()
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of tasks")
        return [
            task_from_dict(item, position, today)
            for position, item in enumerate(data, start=1)
        ]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Could not read tasks from {path}: {exc}") from exc


def save_tasks(tasks: Sequence[Task], path: Path) -> None:
    """
    Write the full task collection, replacing the file contents.

    Parameters
    ----------
    tasks : Sequence[Task]
        Tasks to persist.
    path : Path
        Data file path; parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [task_to_dict(task) for task in tasks]
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
