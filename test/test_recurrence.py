"""
Tests for recurrence arithmetic and successor generation.
"""

import doctest
from datetime import date

import pytest

import tdh.recurrence as recurrence
from tdh.models import Priority, Recurrence, Task
from tdh.recurrence import (
    RecurrenceAssignment,
    SuccessorOutcome,
    add_months,
    assign_recurrence,
    clear_recurrence,
    complete_task,
    create_successor,
    find_existing_successor,
    next_due_date,
    next_task_id,
    spawn_successor,
)

TODAY = date(2026, 2, 10)


def make_task(**kwargs) -> Task:
    values = {"id": 1, "text": "Task", "created_at": date(2026, 2, 1)}
    values.update(kwargs)
    return Task(**values)


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (date(2025, 1, 31), date(2025, 2, 28)),
        (date(2024, 1, 31), date(2024, 2, 29)),
        (date(2026, 3, 31), date(2026, 4, 30)),
        (date(2026, 12, 15), date(2027, 1, 15)),
        (date(2026, 12, 31), date(2027, 1, 31)),
        (date(2026, 5, 10), date(2026, 6, 10)),
    ],
)
@pytest.mark.unit
def test_monthly_next_due_clamps_to_month_end(current, expected):
    """
    Verify monthly recurrence keeps the day or clamps to the last day.

    Returns
    -------
    None
        This test asserts on monthly arithmetic.
    """
    assert next_due_date(current, Recurrence.MONTHLY) == expected


@pytest.mark.unit
def test_daily_and_weekly_cross_month_and_year():
    """
    Ensure daily and weekly steps roll over month and year boundaries.

    Returns
    -------
    None
        This test asserts on day arithmetic.
    """
    assert next_due_date(date(2026, 2, 28), Recurrence.DAILY) == date(2026, 3, 1)
    assert next_due_date(date(2026, 12, 31), Recurrence.DAILY) == date(2027, 1, 1)
    assert next_due_date(date(2026, 12, 28), Recurrence.WEEKLY) == date(2027, 1, 4)


@pytest.mark.unit
def test_add_months_spans_multiple_years():
    """
    Ensure large month offsets land in the right year.

    Returns
    -------
    None
        This test asserts on month offsets.
    """
    assert add_months(date(2026, 11, 30), 15) == date(2028, 2, 29)


@pytest.mark.unit
def test_create_successor_copies_fields_and_links_parent():
    """
    Verify the successor inherits the source's attributes.

    Returns
    -------
    None
        This test asserts on successor fields.
    """
    source = make_task(
        id=7,
        text="Pay rent",
        priority=Priority.HIGH,
        tags=["home", "bills"],
        due_date=date(2026, 1, 31),
        recurrence=Recurrence.MONTHLY,
        completed=True,
        project="Household",
        depends_on=[3],
    )

    successor = create_successor(source, 8, TODAY)

    assert successor is not None
    assert successor.id == 8
    assert successor.parent_id == 7
    assert successor.text == "Pay rent"
    assert successor.priority is Priority.HIGH
    assert successor.tags == ["home", "bills"]
    assert successor.tags is not source.tags
    assert successor.due_date == date(2026, 2, 28)
    assert successor.recurrence is Recurrence.MONTHLY
    assert successor.created_at == TODAY
    assert not successor.completed
    assert successor.completed_at is None
    assert successor.project == "Household"
    assert successor.depends_on == []


@pytest.mark.unit
def test_create_successor_requires_recurrence_and_due_date():
    """
    Ensure tasks without a pattern or due date produce no successor.

    Returns
    -------
    None
        This test asserts on missing successors.
    """
    assert create_successor(make_task(due_date=TODAY), 2, TODAY) is None
    assert create_successor(make_task(recurrence=Recurrence.DAILY), 2, TODAY) is None


@pytest.mark.unit
def test_next_task_id_is_one_past_the_maximum():
    """
    Verify ids are allocated after the largest existing id.

    Returns
    -------
    None
        This test asserts on id allocation.
    """
    tasks = [make_task(id=3), make_task(id=9), make_task(id=5)]
    assert next_task_id(tasks) == 10


@pytest.mark.unit
def test_find_existing_successor_prefers_parent_link():
    """
    Verify a linked task is found even if its due date was edited.

    Returns
    -------
    None
        This test asserts on parent-based dedup.
    """
    source = make_task(id=1, text="Report", due_date=date(2026, 2, 3),
                       recurrence=Recurrence.WEEKLY, completed=True)
    linked = make_task(id=2, text="Report (moved)", due_date=date(2026, 2, 20),
                       parent_id=1)
    tasks = [source, linked]

    assert find_existing_successor(tasks, source, date(2026, 2, 10)) is linked


@pytest.mark.unit
def test_find_existing_successor_falls_back_to_text_and_due():
    """
    Verify legacy tasks without a parent link are matched by text and due date.

    Returns
    -------
    None
        This test asserts on text-based dedup.
    """
    source = make_task(id=1, text="Report", due_date=date(2026, 2, 3),
                       recurrence=Recurrence.WEEKLY, completed=True)
    legacy = make_task(id=2, text="Report", due_date=date(2026, 2, 10))
    finished = make_task(id=3, text="Report", due_date=date(2026, 2, 10), completed=True)

    assert find_existing_successor([source, legacy], source, date(2026, 2, 10)) is legacy
    assert find_existing_successor([source, finished], source, date(2026, 2, 10)) is None


@pytest.mark.unit
def test_complete_task_appends_successor():
    """
    Verify completing a recurring task appends its next occurrence.

    Returns
    -------
    None
        This test asserts on the completion flow.
    """
    tasks = [
        make_task(id=1, text="Other"),
        make_task(id=2, text="Gym", due_date=date(2026, 2, 9),
                  recurrence=Recurrence.DAILY),
    ]

    result = complete_task(tasks, 2, TODAY)

    assert result.outcome is SuccessorOutcome.CREATED
    assert result.number == 3
    assert result.next_due == date(2026, 2, 10)
    assert tasks[1].completed
    assert tasks[1].completed_at == TODAY
    assert len(tasks) == 3
    assert tasks[2] is result.successor
    assert tasks[2].id == 3
    assert tasks[2].parent_id == 2


@pytest.mark.unit
def test_completing_twice_does_not_duplicate_successor():
    """
    Ensure a second successor step for the same source is skipped.

    Returns
    -------
    None
        This test asserts on idempotent successor creation.
    """
    tasks = [
        make_task(id=1, text="Water plants", due_date=date(2026, 2, 3),
                  recurrence=Recurrence.WEEKLY),
    ]

    first = complete_task(tasks, 1, TODAY)
    tasks[0].mark_undone()
    tasks[0].mark_done(TODAY)
    second = spawn_successor(tasks, tasks[0], TODAY)

    assert first.outcome is SuccessorOutcome.CREATED
    assert second.outcome is SuccessorOutcome.ALREADY_EXISTS
    assert second.next_due == date(2026, 2, 10)
    assert len(tasks) == 2


@pytest.mark.unit
def test_complete_task_without_recurrence():
    """
    Verify non-recurring completion reports no successor.

    Returns
    -------
    None
        This test asserts on the non-recurring outcome.
    """
    tasks = [make_task(id=1, due_date=TODAY)]

    result = complete_task(tasks, 1, TODAY)

    assert result.outcome is SuccessorOutcome.NOT_RECURRING
    assert result.successor is None
    assert len(tasks) == 1


@pytest.mark.unit
def test_complete_task_rejects_invalid_or_completed():
    """
    Ensure bad numbers and already completed tasks raise.

    Returns
    -------
    None
        This test asserts on completion errors.
    """
    tasks = [make_task(id=1, completed=True)]

    with pytest.raises(ValueError, match="already marked as completed"):
        complete_task(tasks, 1, TODAY)
    with pytest.raises(ValueError, match="invalid"):
        complete_task(tasks, 2, TODAY)
    with pytest.raises(ValueError, match="invalid"):
        complete_task(tasks, 0, TODAY)


@pytest.mark.unit
def test_complete_task_refuses_pending_dependencies():
    """
    Verify a task cannot be completed while a dependency is pending.

    Returns
    -------
    None
        This test asserts on blocked completion.
    """
    tasks = [
        make_task(id=4, text="Write draft"),
        make_task(id=5, text="Review draft", completed=True),
        make_task(id=6, text="Publish", depends_on=[4, 5]),
    ]

    with pytest.raises(ValueError, match=r'Task #3 is blocked by pending dependencies: #1 "Write draft"$'):
        complete_task(tasks, 3, TODAY)
    assert not tasks[2].completed

    complete_task(tasks, 1, TODAY)
    complete_task(tasks, 3, TODAY)

    assert tasks[2].completed


@pytest.mark.unit
def test_complete_task_ignores_links_to_missing_tasks():
    """
    Ensure a dependency id with no matching task does not block.

    Returns
    -------
    None
        This test asserts on dangling links.
    """
    tasks = [make_task(id=1, depends_on=[99])]

    complete_task(tasks, 1, TODAY)

    assert tasks[0].completed

@pytest.mark.unit
def test_assign_recurrence_outcomes():
    """
    Verify set, update, unchanged and rejected assignments.

    Returns
    -------
    None
        This test asserts on recurrence assignment.
    """
    task = make_task(due_date=TODAY)

    assert assign_recurrence(task, Recurrence.DAILY) is RecurrenceAssignment.SET
    assert assign_recurrence(task, Recurrence.DAILY) is RecurrenceAssignment.UNCHANGED
    assert assign_recurrence(task, Recurrence.MONTHLY) is RecurrenceAssignment.UPDATED
    assert task.recurrence is Recurrence.MONTHLY

    undated = make_task()
    assert assign_recurrence(undated, Recurrence.DAILY) is RecurrenceAssignment.REJECTED_NO_DUE_DATE
    assert undated.recurrence is None


@pytest.mark.unit
def test_clear_recurrence_returns_previous_pattern():
    """
    Verify clearing reports the removed pattern.

    Returns
    -------
    None
        This test asserts on recurrence removal.
    """
    task = make_task(due_date=TODAY, recurrence=Recurrence.WEEKLY)

    assert clear_recurrence(task) is Recurrence.WEEKLY
    assert task.recurrence is None
    assert clear_recurrence(task) is None


@pytest.mark.unit
def test_recurrence_doctest_examples():
    """
    Run doctest examples embedded in recurrence docstrings.

    Returns
    -------
    None
        This test asserts that doctest examples succeed.
    """
    results = doctest.testmod(recurrence)
    assert results.failed == 0
