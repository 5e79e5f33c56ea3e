"""
Tests for JSON persistence of the task collection.
"""

import doctest
import json
from datetime import date

import pytest

import tdh.storage as storage
from tdh.models import Priority, Recurrence, Task
from tdh.storage import load_tasks, save_tasks, task_from_dict, task_to_dict

TODAY = date(2026, 2, 10)


@pytest.mark.unit
def test_legacy_record_gets_defaults():
    """
    Verify records written before newer fields existed still load.

    Returns
    -------
    None
        This test asserts on defaulted fields.
    """
    payload = {
        "text": "Old task",
        "completed": True,
        "priority": "high",
        "created_at": "2025-06-01",
    }

    task = task_from_dict(payload, 4, TODAY)

    assert task.id == 4
    assert task.text == "Old task"
    assert task.completed
    assert task.priority is Priority.HIGH
    assert task.tags == []
    assert task.due_date is None
    assert task.recurrence is None
    assert task.parent_id is None
    assert task.completed_at is None
    assert task.project is None
    assert task.depends_on == []
    assert task.created_at == date(2025, 6, 1)


@pytest.mark.unit
def test_missing_created_at_uses_today():
    """
    Ensure a record without a creation date falls back to today.

    Returns
    -------
    None
        This test asserts on the creation fallback.
    """
    task = task_from_dict({"text": "x"}, 1, TODAY)
    assert task.created_at == TODAY
    assert task.priority is Priority.MEDIUM


@pytest.mark.unit
def test_task_to_dict_includes_optional_fields_when_set():
    """
    Verify recurrence, lineage, project and dependencies are written when set.

    Returns
    -------
    None
        This test asserts on the stored shape.
    """
    task = Task(
        id=5,
        text="Gym",
        created_at=date(2026, 2, 1),
        completed=True,
        tags=["health"],
        due_date=date(2026, 2, 9),
        recurrence=Recurrence.DAILY,
        parent_id=2,
        completed_at=TODAY,
        project="Fitness",
        depends_on=[1, 3],
    )

    payload = task_to_dict(task)

    assert payload == {
        "id": 5,
        "text": "Gym",
        "completed": True,
        "priority": "medium",
        "tags": ["health"],
        "due_date": "2026-02-09",
        "created_at": "2026-02-01",
        "recurrence": "daily",
        "parent_id": 2,
        "completed_at": "2026-02-10",
        "project": "Fitness",
        "depends_on": [1, 3],
    }


@pytest.mark.unit
def test_save_and_load_preserve_order_and_fields(tmp_path):
    """
    Verify a saved collection reloads unchanged.

    Returns
    -------
    None
        This test asserts on persistence.
    """
    path = tmp_path / "nested" / "todos.json"
    tasks = [
        Task(id=1, text="First", created_at=date(2026, 1, 5), tags=["a", "b"]),
        Task(id=3, text="Second", created_at=date(2026, 1, 6), priority=Priority.LOW,
             due_date=date(2026, 3, 31), recurrence=Recurrence.MONTHLY),
        Task(id=4, text="Third", created_at=date(2026, 1, 7), parent_id=3,
             project="Home", depends_on=[1]),
    ]

    save_tasks(tasks, path)

    assert load_tasks(path, TODAY) == tasks
    assert [item["id"] for item in json.loads(path.read_text(encoding="utf-8"))] == [1, 3, 4]


@pytest.mark.unit
def test_load_missing_or_empty_file(tmp_path):
    """
    Ensure a missing or blank data file means no tasks.

    Returns
    -------
    None
        This test asserts on empty loads.
    """
    path = tmp_path / "todos.json"
    assert load_tasks(path, TODAY) == []

    path.write_text("  \n", encoding="utf-8")
    assert load_tasks(path, TODAY) == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"text": "object, not array"}',
        '[{"completed": false}]',
        '[{"text": "bad priority", "priority": "urgent"}]',
        '[{"text": "bad date", "due_date": "02/10/2026"}]',
        "[1]",
        '["just a string"]',
        '[{"text": "bad dependency", "depends_on": ["two"]}]',
    ],
)
@pytest.mark.unit
def test_load_rejects_malformed_file(tmp_path, content):
    """
    Verify malformed data raises a descriptive error.

    Returns
    -------
    None
        This test asserts on load errors.
    """
    path = tmp_path / "todos.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match="Could not read tasks"):
        load_tasks(path, TODAY)


@pytest.mark.unit
def test_storage_doctest_examples():
    """
    Run doctest examples embedded in storage docstrings.

    Returns
    -------
    None
        This test asserts that doctest examples succeed.
    """
    results = doctest.testmod(storage)
    assert results.failed == 0
