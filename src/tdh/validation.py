#!/usr/bin/env python3
"""
Input checks applied before tasks are created or modified.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from .models import Task

MAX_TEXT_LENGTH = 500
MAX_TAG_LENGTH = 50
MAX_PROJECT_LENGTH = 100
TAG_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_task_number(number: int, total: int) -> None:
    """
    Ensure a user-facing task number points into the collection.

    Parameters
    ----------
    number : int
        1-based task number.
    total : int
        Number of tasks in the collection.

    Raises
    ------
    ValueError
        If the number is outside ``1..total``.

    Examples
    --------
    >>> validate_task_number(2, 3)
    >>> validate_task_number(4, 3)
    Traceback (most recent call last):
    ...
    ValueError: Task #4 is invalid (valid range: 1-3).
    """
    if number < 1 or number > total:
        if total == 0:
            raise ValueError(f"Task #{number} is invalid (the task list is empty).")
        raise ValueError(f"Task #{number} is invalid (valid range: 1-{total}).")


def validate_task_text(text: str) -> str:
    """
    Return trimmed task text, rejecting empty or overly long input.

    Examples
    --------
    >>> validate_task_text("  Buy milk ")
    'Buy milk'
    """
    trimmed = text.strip()
    if not trimmed:
        raise ValueError("Task text cannot be empty.")
    if len(trimmed) > MAX_TEXT_LENGTH:
        raise ValueError(
            f"Task text too long (max: {MAX_TEXT_LENGTH} characters, "
            f"actual: {len(trimmed)} characters)."
        )
    return trimmed


def validate_project_name(name: str) -> str:
    """
    Return a trimmed project name, rejecting empty or overly long input.

    Examples
    --------
    >>> validate_project_name(" Backend ")
    'Backend'
    """
    trimmed = name.strip()
    if not trimmed:
        raise ValueError("Project name cannot be empty.")
    if len(trimmed) > MAX_PROJECT_LENGTH:
        raise ValueError(
            f"Project name too long (max: {MAX_PROJECT_LENGTH} characters, "
            f"actual: {len(trimmed)} characters)."
        )
    return trimmed

def validate_tags(tags: Sequence[str]) -> List[str]:
    """
    Validate tag names and return them trimmed.

    Parameters
    ----------
    tags : Sequence[str]
        Raw tag values.

    Returns
    -------
    List[str]
        Trimmed tags in input order.

    Raises
    ------
    ValueError
        For empty, too long, malformed or duplicate tags.

    Examples
    --------
    >>> validate_tags([" work", "home "])
    ['work', 'home']
    >>> validate_tags(["work", "Work"])
    Traceback (most recent call last):
    ...
    ValueError: Duplicate tag: 'Work' (tags must be unique, case-insensitive).
    """
    cleaned: List[str] = []
    seen = set()
    for raw in tags:
        tag = raw.strip()
        if not tag:
            raise ValueError("Tag cannot be empty.")
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(
                f"Tag too long (max: {MAX_TAG_LENGTH} characters, actual: {len(tag)} characters)."
            )
        if not TAG_PATTERN.match(tag):
            raise ValueError(
                f"Invalid tag format: '{tag}' (tags can only contain alphanumeric "
                "characters, hyphens, and underscores)."
            )
        key = tag.lower()
        if key in seen:
            raise ValueError(f"Duplicate tag: '{tag}' (tags must be unique, case-insensitive).")
        seen.add(key)
        cleaned.append(tag)
    return cleaned


def split_tag_values(values: Iterable[str]) -> List[str]:
    """
    Expand comma-separated tag options into individual tags.

    Examples
    --------
    >>> split_tag_values(["work,urgent", "home"])
    ['work', 'urgent', 'home']
    """
    tags: List[str] = []
    for value in values:
        tags.extend(part.strip() for part in value.split(",") if part.strip())
    return tags


def collect_existing_tags(tasks: Iterable[Task]) -> List[str]:
    existing: List[str] = []
    for task in tasks:
        for tag in task.tags:
            if tag not in existing:
                existing.append(tag)
    return existing


def normalize_tags(tags: Sequence[str], existing: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Reuse the stored spelling of tags that differ only by case.

    Parameters
    ----------
    tags : Sequence[str]
        New tags.
    existing : Sequence[str]
        Tags already present in the collection.

    Returns
    -------
    Tuple[List[str], List[str]]
        Normalized tags and a message per tag that was rewritten.

    Examples
    --------
    >>> normalize_tags(["Work", "home"], ["work"])
    (['work', 'home'], ["'Work' -> 'work'"])
    """
    by_key = {}
    for tag in existing:
        by_key.setdefault(tag.lower(), tag)
    normalized: List[str] = []
    messages: List[str] = []
    for tag in tags:
        match = by_key.get(tag.lower())
        if match is not None and match != tag:
            messages.append(f"'{tag}' -> '{match}'")
            normalized.append(match)
        else:
            normalized.append(tag)
    return normalized, messages
