#!/usr/bin/env python3
"""
Personal task tracker with recurring tasks and filtered list views.
"""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from . import config as config_module
from .dates import format_date, parse_date, parse_future_date
from .dependencies import (
    add_dependencies,
    blocking_dependencies,
    dependents,
    drop_references,
    is_blocked,
    locate_task,
    remove_dependencies,
    resolve_dependency_ids,
)
from .layout import (
    ANSI_BOLD,
    ANSI_CYAN,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_YELLOW,
    paint,
    render_table,
)
from .models import (
    DUE_SOON_WINDOW_DAYS,
    DueFilter,
    Priority,
    Recurrence,
    RecurrenceFilter,
    SortKey,
    StatusFilter,
    Task,
)
from .query import (
    FilterCriteria,
    apply,
    collect_projects,
    collect_tags,
    determine_title,
    search,
)
from .recurrence import (
    RecurrenceAssignment,
    SuccessorOutcome,
    assign_recurrence,
    clear_recurrence,
    complete_task,
    next_task_id,
)
from .storage import load_tasks, save_tasks
from .validation import (
    collect_existing_tags,
    normalize_tags,
    split_tag_values,
    validate_project_name,
    validate_tags,
    validate_task_number,
    validate_task_text,
)

ACTIVITY_DAYS = 7
ACTIVITY_BAR_WIDTH = 10
CONFIRM_ANSWERS = {"y", "yes"}


def resolve_data_path(
    path: Optional[Path] = None,
    settings: Optional[config_module.Settings] = None,
) -> Path:
    if path is not None:
        return path
    return config_module.get_data_path(settings)


def use_color(color: Optional[bool], settings: config_module.Settings) -> bool:
    if color is not None:
        return color
    return settings.color and sys.stdout.isatty()


def confirm(message: str, input_func: Callable[[str], str] = input) -> bool:
    """
    Ask a yes/no question; only "y" or "yes" confirm.

    Parameters
    ----------
    message : str
        Prompt text.
    input_func : Callable[[str], str], optional
        Input function for prompts (default: input).

    Returns
    -------
    bool
        True when the user confirmed.

    Examples
    --------
    >>> confirm("Sure? ", input_func=lambda _: " YES ")
    True
    >>> confirm("Sure? ", input_func=lambda _: "")
    False
    """
    if input_func is not input:
        answer = input_func(message)
    else:
        try:
            from prompt_toolkit import prompt as pt_prompt
        except ImportError:
            answer = input_func(message)
        else:
            answer = pt_prompt(message)
    return answer.strip().lower() in CONFIRM_ANSWERS


def _fail(message: str) -> int:
    print(f"tdh: {message}", file=sys.stderr)
    return 1


def run_add(
    text: str,
    *,
    priority: Priority = Priority.MEDIUM,
    tags: Sequence[str] = (),
    due: Optional[str] = None,
    recurrence: Optional[Recurrence] = None,
    project: Optional[str] = None,
    depends_on: Sequence[int] = (),
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    """
    Create a task and append it to the collection.

    Parameters
    ----------
    text : str
        Task description.
    priority : Priority, optional
        Priority level (default: medium).
    tags : Sequence[str], optional
        Tags, comma-separated values allowed.
    due : Optional[str], optional
        Due date expression; must not be in the past.
    recurrence : Optional[Recurrence], optional
        Recurrence pattern; requires ``due``.
    project : Optional[str], optional
        Project name.
    depends_on : Sequence[int], optional
        Numbers of existing tasks that must be completed first.
    path : Optional[Path], optional
        Data file override.
    today : Optional[date], optional
        Override for the current date.

    Returns
    -------
    int
        Exit code.
    """
    today = today or date.today()
    data_path = resolve_data_path(path)
    try:
        clean_text = validate_task_text(text)
        clean_tags = validate_tags(split_tag_values(tags))
        clean_project = validate_project_name(project) if project is not None else None
        due_date = parse_future_date(due, today) if due else None
        if recurrence is not None and due_date is None:
            raise ValueError("Recurring tasks must have a due date. Use --due YYYY-MM-DD.")
        tasks = load_tasks(data_path, today)
        dep_ids = resolve_dependency_ids(tasks, depends_on, len(tasks) + 1)
    except ValueError as exc:
        return _fail(str(exc))

    normalized, messages = normalize_tags(clean_tags, collect_existing_tags(tasks))
    task = Task(
        id=next_task_id(tasks),
        text=clean_text,
        created_at=today,
        priority=priority,
        tags=normalized,
        due_date=due_date,
        recurrence=recurrence,
        project=clean_project,
        depends_on=dep_ids,
    )
    tasks.append(task)
    save_tasks(tasks, data_path)

    for message in messages:
        print(f"  ~ Tag normalized: {message}")
    if recurrence is not None:
        print(f"Added task #{len(tasks)} with {recurrence.value} recurrence")
    else:
        print(f"Added task #{len(tasks)}")
    return 0


def run_list(
    criteria: FilterCriteria,
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
    color: Optional[bool] = None,
) -> int:
    """
    Print the filtered, sorted task table.

    Parameters
    ----------
    criteria : FilterCriteria
        Filters and sort key.
    path : Optional[Path], optional
        Data file override.
    today : Optional[date], optional
        Override for the current date.
    color : Optional[bool], optional
        Force color on or off (default: from settings and TTY).

    Returns
    -------
    int
        Exit code; 1 when nothing matches.
    """
    today = today or date.today()
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings), today)
    except ValueError as exc:
        return _fail(str(exc))

    view = apply(tasks, criteria, today)
    if not view:
        if criteria.tag is not None and not any(criteria.tag in t.tags for t in tasks):
            return _fail(f"Tag '{criteria.tag}' not found in any task.")
        if criteria.project is not None and not any(
            t.matches_project(criteria.project) for t in tasks
        ):
            return _fail(f"Project '{criteria.project}' not found in any task.")
        return _fail("No tasks found matching the specified filters.")

    enabled = use_color(color, settings)
    for line in render_table(view, determine_title(criteria), today, color=enabled):
        print(line)
    return 0


def run_done(
    number: int,
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    """
    Mark a task completed and schedule its next occurrence.

    Parameters
    ----------
    number : int
        1-based task number.
    path : Optional[Path], optional
        Data file override.
    today : Optional[date], optional
        Override for the current date.

    Returns
    -------
    int
        Exit code.
    """
    today = today or date.today()
    data_path = resolve_data_path(path)
    try:
        tasks = load_tasks(data_path, today)
        result = complete_task(tasks, number, today)
    except ValueError as exc:
        return _fail(str(exc))

    save_tasks(tasks, data_path)
    print("Task marked as completed")
    if result.outcome is SuccessorOutcome.CREATED:
        print(f"Task #{result.number} created (due {format_date(result.next_due)})")
    elif result.outcome is SuccessorOutcome.ALREADY_EXISTS:
        print("Next recurrence already exists, skipping creation.")
    return 0


def run_undone(
    number: int,
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    today = today or date.today()
    data_path = resolve_data_path(path)
    try:
        tasks = load_tasks(data_path, today)
        validate_task_number(number, len(tasks))
    except ValueError as exc:
        return _fail(str(exc))

    task = tasks[number - 1]
    if not task.completed:
        return _fail(f"Task #{number} is already marked as pending.")
    task.mark_undone()
    save_tasks(tasks, data_path)
    print("Task unmarked")
    return 0


def run_remove(
    number: int,
    *,
    yes: bool = False,
    path: Optional[Path] = None,
    today: Optional[date] = None,
    input_func: Callable[[str], str] = input,
) -> int:
    """
    Delete a task after confirmation.

    Later tasks move up one position; ids and ``parent_id`` links are kept.
    Other tasks stop depending on the removed one.
    """
    today = today or date.today()
    settings = config_module.load_settings()
    data_path = resolve_data_path(path, settings)
    try:
        tasks = load_tasks(data_path, today)
        validate_task_number(number, len(tasks))
    except ValueError as exc:
        return _fail(str(exc))

    task = tasks[number - 1]
    if not yes and settings.confirm:
        print(f"\n  {task.text}")
        if not confirm("Are you sure? [y/N]: ", input_func=input_func):
            print("Removal cancelled.")
            return 0

    del tasks[number - 1]
    drop_references(tasks, [task.id])
    save_tasks(tasks, data_path)
    print(f"Task removed: {task.text}")
    return 0


def run_edit(
    number: int,
    *,
    text: Optional[str] = None,
    priority: Optional[Priority] = None,
    due: Optional[str] = None,
    clear_due: bool = False,
    add_tags: Sequence[str] = (),
    remove_tags: Sequence[str] = (),
    clear_tags: bool = False,
    project: Optional[str] = None,
    clear_project: bool = False,
    add_deps: Sequence[int] = (),
    remove_deps: Sequence[int] = (),
    clear_deps: bool = False,
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    """
    Change selected fields of a task.

    Parameters
    ----------
    number : int
        1-based task number.
    text : Optional[str], optional
        New description.
    priority : Optional[Priority], optional
        New priority.
    due : Optional[str], optional
        New due date expression; past dates are accepted.
    clear_due : bool, optional
        Remove the due date (and any recurrence that depends on it).
    add_tags, remove_tags : Sequence[str], optional
        Tags to add or remove, comma-separated values allowed.
    clear_tags : bool, optional
        Remove every tag.
    project : Optional[str], optional
        New project name.
    clear_project : bool, optional
        Remove the task from its project.
    add_deps, remove_deps : Sequence[int], optional
        Numbers of tasks to start or stop depending on.
    clear_deps : bool, optional
        Remove every dependency.
    path : Optional[Path], optional
        Data file override.
    today : Optional[date], optional
        Override for the current date.

    Returns
    -------
    int
        Exit code.
    """
    today = today or date.today()
    data_path = resolve_data_path(path)
    if due and clear_due:
        return _fail("Use either --due or --clear-due, not both.")
    if project is not None and clear_project:
        return _fail("Use either --project or --clear-project, not both.")
    if clear_tags and (add_tags or remove_tags):
        return _fail("Use either --clear-tags or --add-tag/--remove-tag, not both.")
    if clear_deps and (add_deps or remove_deps):
        return _fail("Use either --clear-deps or --add-dep/--remove-dep, not both.")
    try:
        tasks = load_tasks(data_path, today)
        validate_task_number(number, len(tasks))
        new_text = validate_task_text(text) if text is not None else None
        new_due = parse_date(due, today) if due else None
        new_project = validate_project_name(project) if project is not None else None
        to_add = validate_tags(split_tag_values(add_tags))
        to_remove = split_tag_values(remove_tags)
        task = tasks[number - 1]
        previous_deps = list(task.depends_on)
        if remove_deps:
            remove_dependencies(tasks, number, remove_deps)
        if add_deps:
            add_dependencies(tasks, number, add_deps)
    except ValueError as exc:
        return _fail(str(exc))

    changes: List[str] = []
    if new_text is not None and new_text != task.text:
        task.text = new_text
        changes.append("text")
    if priority is not None and priority is not task.priority:
        task.priority = priority
        changes.append("priority")
    if new_due is not None and new_due != task.due_date:
        task.due_date = new_due
        changes.append("due date")
    if clear_due and task.due_date is not None:
        task.due_date = None
        changes.append("due date")
        if clear_recurrence(task) is not None:
            changes.append("recurrence")
    if to_add:
        normalized, _ = normalize_tags(to_add, collect_existing_tags(tasks))
        added = [tag for tag in normalized if tag not in task.tags]
        if added:
            task.tags.extend(added)
            changes.append("tags")
    if to_remove:
        remaining = [tag for tag in task.tags if tag not in to_remove]
        if len(remaining) != len(task.tags):
            task.tags = remaining
            if "tags" not in changes:
                changes.append("tags")
    if clear_tags and task.tags:
        task.tags = []
        changes.append("tags")
    if new_project is not None and new_project != task.project:
        task.project = new_project
        changes.append("project")
    if clear_project and task.project is not None:
        task.project = None
        changes.append("project")
    if clear_deps:
        task.depends_on = []
    if task.depends_on != previous_deps:
        changes.append("dependencies")

    if not changes:
        print(f"No changes made to task #{number}")
        return 0
    save_tasks(tasks, data_path)
    print(f"Task #{number} updated: {', '.join(changes)}")
    return 0


def run_recur(
    number: int,
    pattern: Recurrence,
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    today = today or date.today()
    data_path = resolve_data_path(path)
    try:
        tasks = load_tasks(data_path, today)
        validate_task_number(number, len(tasks))
    except ValueError as exc:
        return _fail(str(exc))

    task = tasks[number - 1]
    previous = task.recurrence
    outcome = assign_recurrence(task, pattern)
    if outcome is RecurrenceAssignment.REJECTED_NO_DUE_DATE:
        return _fail(
            f"Task #{number} has no due date. "
            f"Add one with: tdh edit {number} --due YYYY-MM-DD"
        )
    if outcome is RecurrenceAssignment.UNCHANGED:
        print(f"Recurrence already set to {pattern.value} for task #{number}")
        return 0
    save_tasks(tasks, data_path)
    if outcome is RecurrenceAssignment.UPDATED:
        print(f"Updated recurrence for task #{number}: {previous.value} -> {pattern.value}")
    else:
        print(f"Set {pattern.value} recurrence for task #{number}")
    return 0


def run_norecur(
    number: int,
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
) -> int:
    today = today or date.today()
    data_path = resolve_data_path(path)
    try:
        tasks = load_tasks(data_path, today)
        validate_task_number(number, len(tasks))
    except ValueError as exc:
        return _fail(str(exc))

    previous = clear_recurrence(tasks[number - 1])
    if previous is None:
        print(f"Task #{number} has no recurrence")
        return 0
    save_tasks(tasks, data_path)
    print(f"Removed {previous.value} recurrence from task #{number}")
    return 0


def run_search(
    query: str,
    *,
    tag: Optional[str] = None,
    status: StatusFilter = StatusFilter.ALL,
    project: Optional[str] = None,
    path: Optional[Path] = None,
    today: Optional[date] = None,
    color: Optional[bool] = None,
) -> int:
    today = today or date.today()
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings), today)
    except ValueError as exc:
        return _fail(str(exc))

    view = search(tasks, query, status=status, tag=tag, project=project)
    if not view:
        return _fail(f"Search returned no results for query: '{query}'")
    title = f'Search results for "{query}"'
    for line in render_table(view, title, today, color=use_color(color, settings)):
        print(line)
    return 0


def run_tags(
    *,
    path: Optional[Path] = None,
    color: Optional[bool] = None,
) -> int:
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings))
    except ValueError as exc:
        return _fail(str(exc))

    counts = collect_tags(tasks)
    if not counts:
        return _fail("No tags found in any task.")
    enabled = use_color(color, settings)
    print("\nTags:\n")
    for tag, count in counts:
        label = "task" if count == 1 else "tasks"
        print(f"  {paint(tag, ANSI_CYAN, color=enabled)} ({count} {label})")
    print()
    return 0


def run_projects(
    *,
    path: Optional[Path] = None,
    color: Optional[bool] = None,
) -> int:
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings))
    except ValueError as exc:
        return _fail(str(exc))

    counts = collect_projects(tasks)
    if not counts:
        return _fail("No projects found in any task.")
    enabled = use_color(color, settings)
    print("\nProjects:\n")
    for name, pending, done in counts:
        print(f"  {paint(name, ANSI_CYAN, color=enabled)} ({pending} pending, {done} done)")
    print()
    return 0


def _dependency_line(number: int, task: Task, color: bool) -> str:
    if task.completed:
        return f"    [x] #{number}  {paint(task.text, ANSI_DIM, color=color)}"
    return f"    [ ] #{number}  {task.text}"


def run_deps(
    number: int,
    *,
    path: Optional[Path] = None,
    color: Optional[bool] = None,
) -> int:
    """
    Show what a task depends on, what depends on it and whether it is blocked.

    Parameters
    ----------
    number : int
        1-based task number.
    path : Optional[Path], optional
        Data file override.
    color : Optional[bool], optional
        Force color on or off (default: from settings and TTY).

    Returns
    -------
    int
        Exit code.
    """
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings))
        validate_task_number(number, len(tasks))
    except ValueError as exc:
        return _fail(str(exc))

    enabled = use_color(color, settings)
    task = tasks[number - 1]
    print(f"\nTask #{number}: {paint(task.text, ANSI_BOLD, color=enabled)}\n")

    print(paint("Depends on", ANSI_DIM, color=enabled))
    if not task.depends_on:
        print("    (none)")
    for dep_id in task.depends_on:
        found = locate_task(tasks, dep_id)
        if found is None:
            print(f"    [?] id {dep_id} (task not found)")
        else:
            print(_dependency_line(found[0], found[1], enabled))
    print()

    print(paint("Required by", ANSI_DIM, color=enabled))
    required_by = dependents(tasks, task)
    if not required_by:
        print("    (none)")
    for dep_number, dependent in required_by:
        print(_dependency_line(dep_number, dependent, enabled))
    print()

    blockers = blocking_dependencies(tasks, task)
    if task.completed:
        print("Status: completed")
    elif blockers:
        numbers = ", ".join(f"#{dep_number}" for dep_number, _ in blockers)
        print(f"Status: {paint('blocked', ANSI_RED, color=enabled)} by {numbers}")
    else:
        print(f"Status: {paint('ready', ANSI_GREEN, color=enabled)}")
    print()
    return 0


def format_activity_lines(
    tasks: Sequence[Task],
    today: date,
    color: bool = True,
) -> List[str]:
    """
    Render a per-day completion bar chart for the last week.

    Examples
    --------
    >>> done = Task(id=1, text="x", created_at=date(2026, 2, 1), completed=True,
    ...             completed_at=date(2026, 2, 7))
    >>> format_activity_lines([done], date(2026, 2, 7), color=False)[-1]
    '  Sat 02-07  ##########  1'
    """
    days = [today - timedelta(days=offset) for offset in range(ACTIVITY_DAYS - 1, -1, -1)]
    counts = [
        sum(1 for task in tasks if task.completed and task.completed_at == day)
        for day in days
    ]
    peak = max(counts, default=0)
    lines = []
    for day, count in zip(days, counts):
        bar_length = round(count * ACTIVITY_BAR_WIDTH / peak) if peak else 0
        bar = paint("#" * bar_length, ANSI_GREEN, color=color)
        bar += " " * (ACTIVITY_BAR_WIDTH - bar_length)
        lines.append(f"  {day.strftime('%a %m-%d')}  {bar}  {count}")
    return lines


def run_stats(
    *,
    path: Optional[Path] = None,
    today: Optional[date] = None,
    color: Optional[bool] = None,
) -> int:
    today = today or date.today()
    settings = config_module.load_settings()
    try:
        tasks = load_tasks(resolve_data_path(path, settings), today)
    except ValueError as exc:
        return _fail(str(exc))

    if not tasks:
        print("\nNo tasks found.\n")
        return 0

    enabled = use_color(color, settings)
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    overdue = sum(1 for task in tasks if task.is_overdue(today))
    due_soon = sum(1 for task in tasks if task.is_due_soon(today, DUE_SOON_WINDOW_DAYS))
    recurring = sum(1 for task in tasks if task.recurrence is not None and not task.completed)
    blocked = sum(1 for task in tasks if is_blocked(tasks, task))
    percentage = int(completed * 100 / total)

    print(f"\n{paint('Task statistics', ANSI_BOLD, color=enabled)}\n")
    print(paint("Overview", ANSI_DIM, color=enabled))
    print(f"  {'Total tasks':<14} {total}")
    print(f"  {'Completed':<14} {completed} ({percentage}%)")
    print(f"  {'Pending':<14} {total - completed}")
    if overdue:
        print(f"  {'Overdue':<14} {paint(str(overdue), ANSI_RED, color=enabled)}")
    if due_soon:
        print(f"  {'Due soon':<14} {paint(str(due_soon), ANSI_YELLOW, color=enabled)}")
    if recurring:
        print(f"  {'Recurring':<14} {recurring}")
    if blocked:
        print(f"  {'Blocked':<14} {blocked}")
    print()

    print(paint("By priority", ANSI_DIM, color=enabled))
    for priority in Priority:
        bucket = [task for task in tasks if task.priority is priority]
        if not bucket:
            continue
        done = sum(1 for task in bucket if task.completed)
        print(f"  {priority.label:<8} {len(bucket)}  ({len(bucket) - done} pending, {done} done)")
    print()

    projects = collect_projects(tasks)
    if projects:
        print(paint("By project", ANSI_DIM, color=enabled))
        for name, pending, done in projects:
            print(f"  {name} ({pending} pending, {done} done)")
        loose = [task for task in tasks if task.project is None]
        if loose:
            done = sum(1 for task in loose if task.completed)
            print(f"  (no project) ({len(loose) - done} pending, {done} done)")
        print()

    print(paint(f"Activity, last {ACTIVITY_DAYS} days", ANSI_DIM, color=enabled))
    for line in format_activity_lines(tasks, today, color=enabled):
        print(line)
    print()
    return 0


def run_clear(
    *,
    yes: bool = False,
    path: Optional[Path] = None,
    input_func: Callable[[str], str] = input,
) -> int:
    settings = config_module.load_settings()
    data_path = resolve_data_path(path, settings)
    if not data_path.exists():
        print("No tasks to remove")
        return 0
    try:
        count = len(load_tasks(data_path))
    except ValueError as exc:
        return _fail(str(exc))

    if not yes and settings.confirm:
        print(f"\n{count} tasks will be permanently deleted!")
        if not confirm("Type 'yes' to confirm: ", input_func=input_func):
            print("Clear cancelled.")
            return 0

    data_path.unlink()
    print("All tasks have been removed")
    return 0


def run_info(*, path: Optional[Path] = None) -> int:
    data_path = resolve_data_path(path)
    print("\nTask data information\n")
    print(f"Data file: {data_path}")
    print(f"Config:    {config_module.get_config_path()}")
    if data_path.exists():
        print("Status:    exists")
        print(f"Size:      {data_path.stat().st_size} bytes")
    else:
        print("Status:    not created yet")
    print()
    return 0


def build_app():
    """
    Build the Typer app lazily to keep fast-path imports light.

    Returns
    -------
    typer.Typer
        Configured Typer application for the tdh CLI.
    """
    import typer

    app = typer.Typer(help="Personal task tracker with recurring tasks.")

    def finish(exit_code: int) -> None:
        raise typer.Exit(code=exit_code)

    @app.command("add")
    def add_cmd(
        text: str = typer.Argument(..., help="Task description."),
        priority: Priority = typer.Option(
            Priority.MEDIUM,
            "--priority",
            case_sensitive=False,
            help="Priority level.",
        ),
        tag: List[str] = typer.Option(
            [],
            "--tag",
            "-t",
            help="Tag (repeat or comma-separate for several).",
        ),
        due: Optional[str] = typer.Option(
            None,
            "--due",
            help="Due date: YYYY-MM-DD, tomorrow, 'in 3 days', 'next friday'.",
        ),
        recurrence: Optional[Recurrence] = typer.Option(
            None,
            "--recurrence",
            "-r",
            case_sensitive=False,
            help="Repeat the task when completed (requires --due).",
        ),
        project: Optional[str] = typer.Option(None, "--project", "-p", help="Project name."),
        depends_on: List[int] = typer.Option(
            [],
            "--depends-on",
            "-d",
            help="Number of a task that must be completed first (repeatable).",
        ),
    ):
        finish(
            run_add(
                text,
                priority=priority,
                tags=tag,
                due=due,
                recurrence=recurrence,
                project=project,
                depends_on=depends_on,
            )
        )

    @app.command("list")
    def list_cmd(
        status: StatusFilter = typer.Option(
            StatusFilter.ALL,
            "--status",
            case_sensitive=False,
            help="Show all, pending or done tasks.",
        ),
        priority: Optional[Priority] = typer.Option(
            None,
            "--priority",
            case_sensitive=False,
            help="Filter by priority level.",
        ),
        due: Optional[DueFilter] = typer.Option(
            None,
            "--due",
            case_sensitive=False,
            help="Filter by due-date window.",
        ),
        tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Filter by tag."),
        project: Optional[str] = typer.Option(
            None,
            "--project",
            "-p",
            help="Filter by project (case-insensitive).",
        ),
        recurrence: Optional[RecurrenceFilter] = typer.Option(
            None,
            "--recurrence",
            "-r",
            case_sensitive=False,
            help="Filter by recurrence pattern.",
        ),
        sort: Optional[SortKey] = typer.Option(
            None,
            "--sort",
            "-s",
            case_sensitive=False,
            help="Sort results.",
        ),
    ):
        criteria = FilterCriteria(
            status=status,
            priority=priority,
            due=due,
            tag=tag,
            project=project,
            recurrence=recurrence,
            sort=sort,
        )
        finish(run_list(criteria))

    @app.command("done")
    def done_cmd(number: int = typer.Argument(..., help="Task number.")):
        finish(run_done(number))

    @app.command("undone")
    def undone_cmd(number: int = typer.Argument(..., help="Task number.")):
        finish(run_undone(number))

    @app.command("remove")
    def remove_cmd(
        number: int = typer.Argument(..., help="Task number."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
    ):
        finish(run_remove(number, yes=yes))

    @app.command("edit")
    def edit_cmd(
        number: int = typer.Argument(..., help="Task number."),
        text: Optional[str] = typer.Option(None, "--text", help="New description."),
        priority: Optional[Priority] = typer.Option(
            None,
            "--priority",
            case_sensitive=False,
            help="New priority.",
        ),
        due: Optional[str] = typer.Option(None, "--due", help="New due date."),
        clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date."),
        add_tag: List[str] = typer.Option([], "--add-tag", help="Tags to add."),
        remove_tag: List[str] = typer.Option([], "--remove-tag", help="Tags to remove."),
        clear_tags: bool = typer.Option(False, "--clear-tags", help="Remove all tags."),
        project: Optional[str] = typer.Option(None, "--project", "-p", help="New project."),
        clear_project: bool = typer.Option(False, "--clear-project", help="Remove the project."),
        add_dep: List[int] = typer.Option([], "--add-dep", help="Task numbers to depend on."),
        remove_dep: List[int] = typer.Option([], "--remove-dep", help="Dependencies to drop."),
        clear_deps: bool = typer.Option(False, "--clear-deps", help="Remove all dependencies."),
    ):
        finish(
            run_edit(
                number,
                text=text,
                priority=priority,
                due=due,
                clear_due=clear_due,
                add_tags=add_tag,
                remove_tags=remove_tag,
                clear_tags=clear_tags,
                project=project,
                clear_project=clear_project,
                add_deps=add_dep,
                remove_deps=remove_dep,
                clear_deps=clear_deps,
            )
        )

    @app.command("recur")
    def recur_cmd(
        number: int = typer.Argument(..., help="Task number."),
        pattern: Recurrence = typer.Argument(..., case_sensitive=False, help="Recurrence pattern."),
    ):
        finish(run_recur(number, pattern))

    @app.command("norecur")
    def norecur_cmd(number: int = typer.Argument(..., help="Task number.")):
        finish(run_norecur(number))

    @app.command("search")
    def search_cmd(
        query: str = typer.Argument(..., help="Case-insensitive text to find."),
        tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Narrow to a tag."),
        status: StatusFilter = typer.Option(
            StatusFilter.ALL,
            "--status",
            case_sensitive=False,
            help="Narrow by completion status.",
        ),
        project: Optional[str] = typer.Option(
            None,
            "--project",
            "-p",
            help="Narrow to a project.",
        ),
    ):
        finish(run_search(query, tag=tag, status=status, project=project))

    @app.command("tags")
    def tags_cmd():
        finish(run_tags())

    @app.command("projects")
    def projects_cmd():
        finish(run_projects())

    @app.command("deps")
    def deps_cmd(number: int = typer.Argument(..., help="Task number.")):
        finish(run_deps(number))

    @app.command("stats")
    def stats_cmd():
        finish(run_stats())

    @app.command("clear")
    def clear_cmd(
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
    ):
        finish(run_clear(yes=yes))

    @app.command("info")
    def info_cmd():
        finish(run_info())

    return app


def main():
    """
    Entry point for the tdh command.
    """
    app = build_app()
    app()


if __name__ == "__main__":
    main()
