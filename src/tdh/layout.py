#!/usr/bin/env python3
"""
Column sizing and row rendering for task tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .models import DUE_SOON_WINDOW_DAYS, Priority, Task
from .query import IndexedTask

ELLIPSIS = "..."
TASK_WIDTH = (10, 40)
TAGS_WIDTH = (4, 20)
DUE_WIDTH = (3, 20)
NUMBER_WIDTH = 4
RECURRENCE_MARK = "@"
COLUMN_GAP = "  "

ANSI_RESET = "\x1b[0m"
ANSI_BOLD = "\x1b[1m"
ANSI_DIM = "\x1b[2m"
ANSI_RED = "\x1b[31m"
ANSI_GREEN = "\x1b[32m"
ANSI_YELLOW = "\x1b[33m"
ANSI_CYAN = "\x1b[36m"
ANSI_WHITE = "\x1b[97m"


class DueClass(Enum):
    """
    Urgency bucket of a task's due date relative to today.
    """

    NONE = "none"
    DONE = "done"
    OVERDUE = "overdue"
    TODAY = "today"
    SOON = "soon"
    LATER = "later"


@dataclass(frozen=True)
class ColumnWidths:
    task: int
    tags: int
    due: int


@dataclass(frozen=True)
class VisibleColumns:
    tags: bool
    due: bool
    recurrence: bool


@dataclass(frozen=True)
class TableRow:
    """
    Pre-truncated cell values for one task.

    Attributes
    ----------
    number : int
        1-based task number in the full collection.
    task : Task
        Source task.
    text : str
        Task text fitted to the task column.
    tags : str
        Comma-joined tags fitted to the tags column.
    due : str
        Due text fitted to the due column.
    urgency : DueClass
        Urgency bucket for coloring the due cell.
    """

    number: int
    task: Task
    text: str
    tags: str
    due: str
    urgency: DueClass


@dataclass(frozen=True)
class TableLayout:
    widths: ColumnWidths
    visible: VisibleColumns
    rows: Tuple[TableRow, ...]


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def classify_due(task: Task, today: date) -> DueClass:
    """
    Place a task in its due-date urgency bucket.

    Examples
    --------
    >>> task = Task(id=1, text="Report", created_at=date(2026, 2, 1),
    ...             due_date=date(2026, 2, 5))
    >>> classify_due(task, date(2026, 2, 1)).name
    'SOON'
    >>> classify_due(task, date(2026, 2, 6)).name
    'OVERDUE'
    """
    days = task.days_until_due(today)
    if days is None:
        return DueClass.NONE
    if task.completed:
        return DueClass.DONE
    if days < 0:
        return DueClass.OVERDUE
    if days == 0:
        return DueClass.TODAY
    if days <= DUE_SOON_WINDOW_DAYS:
        return DueClass.SOON
    return DueClass.LATER


def due_text(task: Task, today: date) -> str:
    """
    Describe when a task is due relative to today.

    Parameters
    ----------
    task : Task
        Task to describe.
    today : date
        Reference date.

    Returns
    -------
    str
        "late N days", "due today", "in N days", or "" for tasks without a
        due date and completed tasks.

    Examples
    --------
    >>> task = Task(id=1, text="Report", created_at=date(2026, 2, 1),
    ...             due_date=date(2026, 2, 2))
    >>> due_text(task, date(2026, 2, 1))
    'in 1 day'
    >>> due_text(task, date(2026, 2, 2))
    'due today'
    >>> due_text(task, date(2026, 2, 5))
    'late 3 days'
    """
    urgency = classify_due(task, today)
    if urgency in (DueClass.NONE, DueClass.DONE):
        return ""
    days = task.days_until_due(today)
    if urgency is DueClass.OVERDUE:
        return f"late {_plural(-days, 'day')}"
    if urgency is DueClass.TODAY:
        return "due today"
    if urgency in (DueClass.SOON, DueClass.LATER):
        return f"in {_plural(days, 'day')}"
    raise ValueError(f"Unknown due class: {urgency!r}")


def tags_text(task: Task) -> str:
    return ", ".join(task.tags)


def truncate(value: str, width: int) -> str:
    """
    Fit a value into ``width`` characters, marking cuts with an ellipsis.

    Examples
    --------
    >>> truncate("short", 10)
    'short'
    >>> truncate("abcdefghijkl", 10)
    'abcdefg...'
    """
    if len(value) <= width:
        return value
    return value[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS


def _clamp(longest: int, bounds: Tuple[int, int]) -> int:
    minimum, maximum = bounds
    return min(max(minimum, longest), maximum)


def compute_widths(view: Sequence[IndexedTask], today: date) -> ColumnWidths:
    """
    Size the task, tags and due columns to the longest value in the view.

    Parameters
    ----------
    view : Sequence[IndexedTask]
        Rows to measure.
    today : date
        Reference date for due text.

    Returns
    -------
    ColumnWidths
        Widths clamped to the column minimums and maximums.

    Examples
    --------
    >>> compute_widths([], date(2026, 2, 1))
    ColumnWidths(task=10, tags=4, due=3)
    """
    longest_task = max((len(task.text) for _, task in view), default=0)
    longest_tags = max((len(tags_text(task)) for _, task in view), default=0)
    longest_due = max((len(due_text(task, today)) for _, task in view), default=0)
    return ColumnWidths(
        task=_clamp(longest_task, TASK_WIDTH),
        tags=_clamp(longest_tags, TAGS_WIDTH),
        due=_clamp(longest_due, DUE_WIDTH),
    )


def visible_columns(view: Sequence[IndexedTask], today: date) -> VisibleColumns:
    """
    Decide which optional columns have content in this view.
    """
    return VisibleColumns(
        tags=any(task.tags for _, task in view),
        due=any(due_text(task, today) for _, task in view),
        recurrence=any(task.recurrence is not None for _, task in view),
    )


def build_layout(view: Sequence[IndexedTask], today: date) -> TableLayout:
    """
    Compute widths, visibility and fitted cell values for a view.

    Parameters
    ----------
    view : Sequence[IndexedTask]
        Rows in display order.
    today : date
        Reference date.

    Returns
    -------
    TableLayout
        Layout descriptor consumed by ``render_table``.
    """
    widths = compute_widths(view, today)
    rows = tuple(
        TableRow(
            number=number,
            task=task,
            text=truncate(task.text, widths.task),
            tags=truncate(tags_text(task), widths.tags),
            due=truncate(due_text(task, today), widths.due),
            urgency=classify_due(task, today),
        )
        for number, task in view
    )
    return TableLayout(widths=widths, visible=visible_columns(view, today), rows=rows)


def paint(value: str, *codes: str, color: bool = True) -> str:
    """
    Wrap text in ANSI codes when color output is enabled.

    Examples
    --------
    >>> paint("x", ANSI_RED, color=False)
    'x'
    >>> paint("x", ANSI_RED)
    '\\x1b[31mx\\x1b[0m'
    """
    if not color or not codes or not value:
        return value
    return f"{''.join(codes)}{value}{ANSI_RESET}"


def _priority_codes(priority: Priority) -> Tuple[str, ...]:
    if priority is Priority.HIGH:
        return (ANSI_RED,)
    if priority is Priority.MEDIUM:
        return (ANSI_YELLOW,)
    if priority is Priority.LOW:
        return (ANSI_GREEN,)
    raise ValueError(f"Unknown priority: {priority!r}")


def _due_codes(urgency: DueClass) -> Tuple[str, ...]:
    if urgency is DueClass.OVERDUE:
        return (ANSI_RED, ANSI_BOLD)
    if urgency is DueClass.TODAY:
        return (ANSI_YELLOW, ANSI_BOLD)
    if urgency is DueClass.SOON:
        return (ANSI_YELLOW,)
    if urgency is DueClass.LATER:
        return (ANSI_CYAN,)
    if urgency in (DueClass.NONE, DueClass.DONE):
        return (ANSI_DIM,)
    raise ValueError(f"Unknown due class: {urgency!r}")


def _cell(value: str, width: int, codes: Sequence[str], color: bool) -> str:
    # Pad before coloring so escape codes never count toward the width.
    return paint(value.ljust(width), *codes, color=color)


def render_header(layout: TableLayout, color: bool = True) -> List[str]:
    widths = layout.widths
    cells = [
        "ID".rjust(NUMBER_WIDTH),
        "P",
        " S ",
    ]
    if layout.visible.recurrence:
        cells.append("R")
    cells.append("Task".ljust(widths.task))
    if layout.visible.tags:
        cells.append("Tags".ljust(widths.tags))
    if layout.visible.due:
        cells.append("Due".ljust(widths.due))
    header = COLUMN_GAP.join(cells).rstrip()
    return [paint(header, ANSI_DIM, color=color)]


def table_width(layout: TableLayout) -> int:
    width = NUMBER_WIDTH + 1 + 3 + layout.widths.task + len(COLUMN_GAP) * 3
    if layout.visible.recurrence:
        width += len(RECURRENCE_MARK) + len(COLUMN_GAP)
    if layout.visible.tags:
        width += layout.widths.tags + len(COLUMN_GAP)
    if layout.visible.due:
        width += layout.widths.due + len(COLUMN_GAP)
    return width


def render_row(row: TableRow, layout: TableLayout, color: bool = True) -> str:
    """
    Render one table row.

    Examples
    --------
    >>> task = Task(id=1, text="Buy milk", created_at=date(2026, 2, 1))
    >>> layout = build_layout([(1, task)], date(2026, 2, 1))
    >>> render_row(layout.rows[0], layout, color=False)
    '   1  M  [ ]  Buy milk'
    """
    task = row.task
    completed = task.completed
    cells = [
        paint(str(row.number).rjust(NUMBER_WIDTH), ANSI_DIM, color=color),
        paint(task.priority.letter, *_priority_codes(task.priority), color=color),
        paint("[x]" if completed else "[ ]", ANSI_GREEN if completed else ANSI_WHITE, color=color),
    ]
    if layout.visible.recurrence:
        mark = RECURRENCE_MARK if task.recurrence is not None else " "
        cells.append(paint(mark, ANSI_CYAN, color=color))
    text_codes = (ANSI_GREEN,) if completed else (ANSI_WHITE,)
    cells.append(_cell(row.text, layout.widths.task, text_codes, color))
    if layout.visible.tags:
        tag_codes = (ANSI_DIM,) if completed else (ANSI_CYAN,)
        cells.append(_cell(row.tags, layout.widths.tags, tag_codes, color))
    if layout.visible.due:
        cells.append(paint(row.due, *_due_codes(row.urgency), color=color))
    return COLUMN_GAP.join(cells).rstrip()


def completion_summary(view: Sequence[IndexedTask], color: bool = True) -> str:
    """
    Summarize completion across a view.

    Examples
    --------
    >>> completion_summary([], color=False)
    '0 of 0 completed (0%)'
    """
    total = len(view)
    completed = sum(1 for _, task in view if task.completed)
    percentage = int(completed * 100 / total) if total else 0
    summary = f"{completed} of {total} completed ({percentage}%)"
    if percentage == 100:
        return paint(summary, ANSI_GREEN, ANSI_BOLD, color=color)
    if percentage >= 50:
        return paint(summary, ANSI_YELLOW, color=color)
    return paint(summary, ANSI_RED, color=color)


def render_table(
    view: Sequence[IndexedTask],
    title: str,
    today: date,
    color: bool = True,
    layout: Optional[TableLayout] = None,
) -> List[str]:
    """
    Render a titled task table with a completion summary.

    Parameters
    ----------
    view : Sequence[IndexedTask]
        Rows in display order.
    title : str
        Table title.
    today : date
        Reference date.
    color : bool, optional
        Emit ANSI colors (default: True).
    layout : Optional[TableLayout], optional
        Precomputed layout (default: built from ``view``).

    Returns
    -------
    List[str]
        Output lines.
    """
    layout = layout or build_layout(view, today)
    separator = paint("-" * table_width(layout), ANSI_DIM, color=color)
    lines = ["", f"{title}:", ""]
    lines.extend(render_header(layout, color=color))
    lines.append(separator)
    lines.extend(render_row(row, layout, color=color) for row in layout.rows)
    lines.append(separator)
    lines.append(completion_summary(view, color=color))
    lines.append("")
    return lines
