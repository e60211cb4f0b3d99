"""Calendar date helpers shared by the schedule and streak engine."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterator

from ..errors import InvalidDateError

_ISO_DAY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
ONE_DAY = timedelta(days=1)


def parse_iso_date(value: str | date) -> date:
    """Parse a canonical ``YYYY-MM-DD`` string into a ``date``.

    ``date`` instances pass through unchanged. Anything else, including
    datetimes, week dates and out-of-range days, raises ``InvalidDateError``.
    """

    if isinstance(value, datetime):
        raise InvalidDateError(f"Expected a calendar date without time, got {value!r}")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DAY.fullmatch(value):
        raise InvalidDateError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(f"Not a valid calendar date: {value!r}") from exc


def format_date(day: date) -> str:
    """Return the canonical ISO form used as a log key."""

    return day.isoformat()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` through ``end`` inclusive, ascending.

    Yields nothing when ``start`` is after ``end``.
    """

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += ONE_DAY


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        following = date(year + 1, 1, 1)
    else:
        following = date(year, month + 1, 1)
    return (following - date(year, month, 1)).days


__all__ = [
    "ONE_DAY",
    "days_in_month",
    "format_date",
    "iter_days",
    "parse_iso_date",
]
