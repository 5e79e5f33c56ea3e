#!/usr/bin/env python3
"""
Task record and the enums used to select and order tasks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


DUE_SOON_WINDOW_DAYS = 7


class Priority(str, Enum):
    """
    Priority level of a task.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def order(self) -> int:
        """
        Sort rank, lower is more urgent.

        Examples
        --------
        >>> [p.order for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)]
        [0, 1, 2]
        """
        if self is Priority.HIGH:
            return 0
        if self is Priority.MEDIUM:
            return 1
        if self is Priority.LOW:
            return 2
        raise ValueError(f"Unknown priority: {self!r}")

    @property
    def letter(self) -> str:
        """
        Single-letter label used in the list table.

        Examples
        --------
        >>> Priority.LOW.letter
        'L'
        """
        return self.value[0].upper()

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Recurrence(str, Enum):
    """
    How a task's due date advances after completion.
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class StatusFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    DONE = "done"


class DueFilter(str, Enum):
    """
    Due-date selector; at most one is active for a query.
    """

    OVERDUE = "overdue"
    SOON = "soon"
    WITH_DUE = "with-due"
    NO_DUE = "no-due"


class RecurrenceFilter(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    RECURRING = "recurring"
    NON_RECURRING = "non-recurring"


class SortKey(str, Enum):
    PRIORITY = "priority"
    DUE = "due"
    CREATED = "created"


@dataclass
class Task:
    """
    A single to-do item.

    Attributes
    ----------
    id : int
        Stable identifier, referenced by ``parent_id`` of generated tasks.
    text : str
        Task description.
    created_at : date
        Creation date.
    completed : bool
        Completion state.
    priority : Priority
        Priority level.
    tags : List[str]
        Tags in insertion order.
    due_date : Optional[date]
        Due date, if any.
    recurrence : Optional[Recurrence]
        Recurrence pattern; only set together with ``due_date``.
    parent_id : Optional[int]
        Id of the task this one was generated from by recurrence.
    completed_at : Optional[date]
        Date the task was last marked done.
    project : Optional[str]
        Project the task belongs to.
    depends_on : List[int]
        Ids of tasks that must be completed before this one.
    """

    id: int
    text: str
    created_at: date
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    tags: List[str] = field(default_factory=list)
    due_date: Optional[date] = None
    recurrence: Optional[Recurrence] = None
    parent_id: Optional[int] = None
    completed_at: Optional[date] = None
    project: Optional[str] = None
    depends_on: List[int] = field(default_factory=list)

    def mark_done(self, today: date) -> None:
        self.completed = True
        self.completed_at = today

    def mark_undone(self) -> None:
        self.completed = False
        self.completed_at = None

    def days_until_due(self, today: date) -> Optional[int]:
        if self.due_date is None:
            return None
        return (self.due_date - today).days

    def is_overdue(self, today: date) -> bool:
        """
        Return True when the due date has passed and the task is open.

        Parameters
        ----------
        today : date
            Reference date.

        Returns
        -------
        bool
            True for open tasks due before ``today``.

        Examples
        --------
        >>> task = Task(id=1, text="Pay rent", created_at=date(2026, 1, 1),
        ...             due_date=date(2026, 1, 31))
        >>> task.is_overdue(date(2026, 2, 1))
        True
        >>> task.mark_done(date(2026, 2, 1))
        >>> task.is_overdue(date(2026, 2, 1))
        False
        """
        if self.due_date is None or self.completed:
            return False
        return self.due_date < today

    def is_due_soon(self, today: date, window_days: int) -> bool:
        """
        Return True when an open task is due within ``window_days`` of today.

        Parameters
        ----------
        today : date
            Reference date.
        window_days : int
            Inclusive look-ahead window in days.

        Returns
        -------
        bool
            True when ``0 <= due - today <= window_days``.

        Examples
        --------
        >>> task = Task(id=1, text="Call", created_at=date(2026, 2, 1),
        ...             due_date=date(2026, 2, 8))
        >>> task.is_due_soon(date(2026, 2, 1), 7)
        True
        >>> task.is_due_soon(date(2026, 2, 1), 6)
        False
        """
        days = self.days_until_due(today)
        if days is None or self.completed:
            return False
        return 0 <= days <= window_days

    def matches_status(self, selector: StatusFilter) -> bool:
        if selector is StatusFilter.ALL:
            return True
        if selector is StatusFilter.PENDING:
            return not self.completed
        if selector is StatusFilter.DONE:
            return self.completed
        raise ValueError(f"Unknown status filter: {selector!r}")

    def matches_due(self, selector: DueFilter, today: date) -> bool:
        if selector is DueFilter.OVERDUE:
            return self.is_overdue(today)
        if selector is DueFilter.SOON:
            return self.is_due_soon(today, DUE_SOON_WINDOW_DAYS)
        if selector is DueFilter.WITH_DUE:
            return self.due_date is not None
        if selector is DueFilter.NO_DUE:
            return self.due_date is None
        raise ValueError(f"Unknown due filter: {selector!r}")

    def matches_project(self, name: str) -> bool:
        """
        Compare the project name case-insensitively.

        Examples
        --------
        >>> Task(id=1, text="Fix login", created_at=date(2026, 2, 1),
        ...      project="Backend").matches_project("backend")
        True
        """
        return self.project is not None and self.project.lower() == name.lower()

    def matches_recurrence(self, selector: RecurrenceFilter) -> bool:
        """
        Check the recurrence pattern against a recurrence selector.

        Examples
        --------
        >>> task = Task(id=1, text="Water plants", created_at=date(2026, 2, 1),
        ...             due_date=date(2026, 2, 2), recurrence=Recurrence.WEEKLY)
        >>> task.matches_recurrence(RecurrenceFilter.WEEKLY)
        True
        >>> task.matches_recurrence(RecurrenceFilter.NON_RECURRING)
        False
        """
        if selector is RecurrenceFilter.DAILY:
            return self.recurrence is Recurrence.DAILY
        if selector is RecurrenceFilter.WEEKLY:
            return self.recurrence is Recurrence.WEEKLY
        if selector is RecurrenceFilter.MONTHLY:
            return self.recurrence is Recurrence.MONTHLY
        if selector is RecurrenceFilter.RECURRING:
            return self.recurrence is not None
        if selector is RecurrenceFilter.NON_RECURRING:
            return self.recurrence is None
        raise ValueError(f"Unknown recurrence filter: {selector!r}")
