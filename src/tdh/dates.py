#!/usr/bin/env python3
"""
Parse due dates typed on the command line.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from .recurrence import add_months

DATE_FORMAT = "%Y-%m-%d"
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
RELATIVE_PATTERN = re.compile(r"^in\s+(\d+)\s+(day|week|month)s?$")
WEEKDAY_PATTERN = re.compile(r"^(?:next\s+)?([a-z]+)$")
DATE_HINT = (
    "Accepted formats:\n"
    "  * Keywords:      today, tomorrow, yesterday\n"
    "  * Relative:      in 3 days, in 2 weeks, in 1 month\n"
    "  * Weekdays:      friday, next monday\n"
    "  * Strict format: YYYY-MM-DD (e.g. 2026-02-20)"
)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _parse_weekday(name: str, today: date) -> date:
    weekday = WEEKDAYS.index(name)
    delta = (weekday - today.weekday()) % 7
    return today + timedelta(days=delta or 7)


def parse_date(value: str, today: date) -> date:
    """
    Parse a strict or relative date expression.

    Parameters
    ----------
    value : str
        Raw date text.
    today : date
        Reference date for relative expressions.

    Returns
    -------
    date
        Parsed date.

    Raises
    ------
    ValueError
        If the text matches no supported format.

    Examples
    --------
    >>> today = date(2026, 2, 4)
    >>> parse_date("2026-03-15", today)
    datetime.date(2026, 3, 15)
    >>> parse_date("in 2 weeks", today)
    datetime.date(2026, 2, 18)
    >>> parse_date("next friday", today)
    datetime.date(2026, 2, 6)
    >>> parse_date("wednesday", today)
    datetime.date(2026, 2, 11)
    """
    text = " ".join(value.strip().lower().split())
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass

    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text == "yesterday":
        return today - timedelta(days=1)

    relative = RELATIVE_PATTERN.match(text)
    if relative:
        amount = int(relative.group(1))
        unit = relative.group(2)
        if unit == "day":
            return today + timedelta(days=amount)
        if unit == "week":
            return today + timedelta(weeks=amount)
        return add_months(today, amount)

    weekday = WEEKDAY_PATTERN.match(text)
    if weekday and weekday.group(1) in WEEKDAYS:
        return _parse_weekday(weekday.group(1), today)

    raise ValueError(f"Could not parse date: '{value.strip()}'\n\n{DATE_HINT}")


def parse_future_date(value: str, today: date) -> date:
    """
    Parse a date and reject values before ``today``.

    Examples
    --------
    >>> parse_future_date("yesterday", date(2026, 2, 4))
    Traceback (most recent call last):
    ...
    ValueError: The date interpreted from 'yesterday' is 2026-02-03, which is already in the past.
    """
    parsed = parse_date(value, today)
    if parsed < today:
        raise ValueError(
            f"The date interpreted from '{value.strip()}' is {format_date(parsed)}, "
            "which is already in the past."
        )
    return parsed
