"""
Tests for the task record predicates.
"""

import doctest
from datetime import date

import pytest

import tdh.models as models
from tdh.models import (
    DueFilter,
    Priority,
    Recurrence,
    RecurrenceFilter,
    StatusFilter,
    Task,
)

TODAY = date(2026, 2, 10)


def make_task(**kwargs) -> Task:
    values = {"id": 1, "text": "Task", "created_at": date(2026, 2, 1)}
    values.update(kwargs)
    return Task(**values)


@pytest.mark.parametrize(
    ("due", "completed", "expected"),
    [
        (date(2026, 2, 9), False, True),
        (date(2026, 2, 10), False, False),
        (date(2026, 2, 9), True, False),
        (None, False, False),
    ],
)
@pytest.mark.unit
def test_is_overdue(due, completed, expected):
    """
    Verify overdue requires a past due date on an open task.

    Returns
    -------
    None
        This test asserts on overdue detection.
    """
    assert make_task(due_date=due, completed=completed).is_overdue(TODAY) is expected


@pytest.mark.parametrize(
    ("due", "completed", "window", "expected"),
    [
        (date(2026, 2, 10), False, 7, True),
        (date(2026, 2, 17), False, 7, True),
        (date(2026, 2, 18), False, 7, False),
        (date(2026, 2, 9), False, 7, False),
        (date(2026, 2, 12), True, 7, False),
        (date(2026, 2, 12), False, 1, False),
        (None, False, 7, False),
    ],
)
@pytest.mark.unit
def test_is_due_soon(due, completed, window, expected):
    """
    Verify the due-soon window is inclusive on both ends.

    Returns
    -------
    None
        This test asserts on due-soon detection.
    """
    task = make_task(due_date=due, completed=completed)
    assert task.is_due_soon(TODAY, window) is expected


@pytest.mark.unit
def test_matches_status():
    """
    Verify status selectors against open and completed tasks.

    Returns
    -------
    None
        This test asserts on status matching.
    """
    open_task = make_task()
    done_task = make_task(completed=True)

    assert open_task.matches_status(StatusFilter.ALL)
    assert done_task.matches_status(StatusFilter.ALL)
    assert open_task.matches_status(StatusFilter.PENDING)
    assert not done_task.matches_status(StatusFilter.PENDING)
    assert done_task.matches_status(StatusFilter.DONE)
    assert not open_task.matches_status(StatusFilter.DONE)


@pytest.mark.parametrize(
    ("selector", "due", "expected"),
    [
        (DueFilter.OVERDUE, date(2026, 2, 1), True),
        (DueFilter.OVERDUE, date(2026, 2, 11), False),
        (DueFilter.SOON, date(2026, 2, 17), True),
        (DueFilter.SOON, date(2026, 3, 1), False),
        (DueFilter.WITH_DUE, date(2026, 3, 1), True),
        (DueFilter.WITH_DUE, None, False),
        (DueFilter.NO_DUE, None, True),
        (DueFilter.NO_DUE, date(2026, 3, 1), False),
    ],
)
@pytest.mark.unit
def test_matches_due(selector, due, expected):
    """
    Verify each due selector.

    Returns
    -------
    None
        This test asserts on due matching.
    """
    assert make_task(due_date=due).matches_due(selector, TODAY) is expected


@pytest.mark.parametrize(
    ("selector", "recurrence", "expected"),
    [
        (RecurrenceFilter.DAILY, Recurrence.DAILY, True),
        (RecurrenceFilter.DAILY, Recurrence.WEEKLY, False),
        (RecurrenceFilter.MONTHLY, Recurrence.MONTHLY, True),
        (RecurrenceFilter.RECURRING, Recurrence.WEEKLY, True),
        (RecurrenceFilter.RECURRING, None, False),
        (RecurrenceFilter.NON_RECURRING, None, True),
        (RecurrenceFilter.NON_RECURRING, Recurrence.DAILY, False),
    ],
)
@pytest.mark.unit
def test_matches_recurrence(selector, recurrence, expected):
    """
    Verify each recurrence selector.

    Returns
    -------
    None
        This test asserts on recurrence matching.
    """
    task = make_task(due_date=TODAY, recurrence=recurrence)
    assert task.matches_recurrence(selector) is expected


@pytest.mark.unit
def test_mark_done_and_undone_track_completion_date():
    """
    Ensure completion transitions stamp and clear the completion date.

    Returns
    -------
    None
        This test asserts on completion transitions.
    """
    task = make_task()
    task.mark_done(TODAY)
    assert task.completed
    assert task.completed_at == TODAY

    task.mark_undone()
    assert not task.completed
    assert task.completed_at is None


@pytest.mark.unit
def test_priority_order_and_letters():
    """
    Ensure priority ranks most urgent first.

    Returns
    -------
    None
        This test asserts on priority metadata.
    """
    ordered = sorted([Priority.LOW, Priority.HIGH, Priority.MEDIUM], key=lambda p: p.order)
    assert ordered == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
    assert [p.letter for p in ordered] == ["H", "M", "L"]


@pytest.mark.unit
def test_models_doctest_examples():
    """
    Run doctest examples embedded in models docstrings.

    Returns
    -------
    None
        This test asserts that doctest examples succeed.
    """
    results = doctest.testmod(models)
    assert results.failed == 0
