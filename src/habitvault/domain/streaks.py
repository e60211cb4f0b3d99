"""Streak and completion-rate calculation over a sparse, date-keyed habit log.

Only scheduled days matter: days the recurrence rule skips neither extend nor
break a streak and are left out of the completion rate. An unmarked scheduled
day in the past breaks the running streak; an unmarked ``today`` does not,
since the day is still in progress. ``today`` is likewise excluded from the
completion-rate denominator.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from .dates import ONE_DAY, format_date, iter_days, parse_iso_date
from .habit import DailyStatus, DerivedMetrics, HabitDefinition, normalize_log
from .schedule import RecurrenceRule, is_scheduled


def scheduled_days(rule: RecurrenceRule, start: date, end: date) -> list[date]:
    """Return the scheduled dates between ``start`` and ``end`` inclusive."""

    return [day for day in iter_days(start, end) if is_scheduled(rule, day)]


def compute_streaks(
    habit: HabitDefinition, log: Mapping[str, DailyStatus], today: date
) -> tuple[int, int]:
    """Return ``(current_streak, longest_streak)`` counted in scheduled days."""

    consecutive = 0
    longest = 0
    for day in scheduled_days(habit.rule, habit.start_date, today):
        status = log.get(format_date(day))
        if status is DailyStatus.COMPLETED:
            consecutive += 1
            longest = max(longest, consecutive)
        elif status is DailyStatus.MISSED or day < today:
            consecutive = 0
    return consecutive, longest


def compute_completion_rate(
    habit: HabitDefinition, log: Mapping[str, DailyStatus], today: date
) -> int:
    """Percentage of scheduled days before ``today`` marked completed (0-100)."""

    window = scheduled_days(habit.rule, habit.start_date, today - ONE_DAY)
    total = len(window)
    if total == 0:
        return 0
    completed = sum(1 for day in window if log.get(format_date(day)) is DailyStatus.COMPLETED)
    return percent(completed, total)


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when ``whole`` is 0."""

    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def compute_metrics(
    habit: HabitDefinition,
    log: Mapping[str, "DailyStatus | str"],
    today: date | str,
) -> DerivedMetrics:
    """Fold ``log`` into the derived metrics for ``habit`` as of ``today``.

    Raises ``InvalidDateError`` or ``InvalidStatusError`` for malformed input.
    """

    today = parse_iso_date(today)
    entries = normalize_log(log)
    current, longest = compute_streaks(habit, entries, today)
    return DerivedMetrics(
        current_streak=current,
        longest_streak=longest,
        completion_rate=compute_completion_rate(habit, entries, today),
    )


__all__ = [
    "compute_completion_rate",
    "compute_metrics",
    "compute_streaks",
    "percent",
    "scheduled_days",
]
