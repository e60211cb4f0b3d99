"""Cross-habit aggregates and calendar views built on the streak engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Mapping, Protocol

from .dates import days_in_month, format_date, iter_days
from .habit import DailyStatus, DerivedMetrics, HabitDefinition
from .schedule import is_scheduled
from .streaks import percent

TIME_RANGE_DAYS = {"week": 7, "month": 30, "year": 365}


class HasMetrics(Protocol):
    definition: HabitDefinition
    metrics: DerivedMetrics


@dataclass(frozen=True)
class AnalyticsSummary:
    total_habits: int
    overall_completion_rate: int
    best_habit: str
    best_streak: int
    total_current_streaks: int

    def to_dict(self) -> dict[str, object]:
        return {
            "totalHabits": self.total_habits,
            "overallCompletionRate": self.overall_completion_rate,
            "bestHabit": self.best_habit,
            "bestStreak": self.best_streak,
            "totalCurrentStreaks": self.total_current_streaks,
        }


@dataclass(frozen=True)
class CalendarCell:
    day: date
    scheduled: bool
    status: DailyStatus | None
    is_future: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "date": format_date(self.day),
            "scheduled": self.scheduled,
            "status": self.status.value if self.status else None,
            "isFuture": self.is_future,
        }


@dataclass(frozen=True)
class WindowProgress:
    start: date
    end: date
    scheduled: int
    completed: int
    missed: int

    @property
    def rate(self) -> int:
        return percent(self.completed, self.scheduled)

    def to_dict(self) -> dict[str, object]:
        return {
            "startDate": format_date(self.start),
            "endDate": format_date(self.end),
            "scheduled": self.scheduled,
            "completed": self.completed,
            "missed": self.missed,
            "rate": self.rate,
        }


def summarize(snapshots: Iterable[HasMetrics]) -> AnalyticsSummary:
    """Aggregate per-habit metrics into the dashboard summary.

    The overall rate is the mean of the per-habit rates. The best habit is the
    first one holding the strictly greatest longest streak.
    """

    items = list(snapshots)
    if not items:
        return AnalyticsSummary(0, 0, "-", 0, 0)

    rates = sum(item.metrics.completion_rate for item in items)
    best = items[0]
    for item in items[1:]:
        if item.metrics.longest_streak > best.metrics.longest_streak:
            best = item

    return AnalyticsSummary(
        total_habits=len(items),
        overall_completion_rate=percent(rates, 100 * len(items)),
        best_habit=best.definition.name,
        best_streak=best.metrics.longest_streak,
        total_current_streaks=sum(item.metrics.current_streak for item in items),
    )


def month_calendar(
    habit: HabitDefinition,
    log: Mapping[str, DailyStatus],
    year: int,
    month: int,
    today: date,
) -> list[CalendarCell]:
    """Return one cell per day of the month for a heatmap view.

    Days before the habit started are reported as not scheduled.
    """

    first = date(year, month, 1)
    last = first + timedelta(days=days_in_month(year, month) - 1)
    cells: list[CalendarCell] = []
    for day in iter_days(first, last):
        scheduled = day >= habit.start_date and is_scheduled(habit.rule, day)
        cells.append(
            CalendarCell(
                day=day,
                scheduled=scheduled,
                status=log.get(format_date(day)),
                is_future=day > today,
            )
        )
    return cells


def window_progress(
    habit: HabitDefinition,
    log: Mapping[str, DailyStatus],
    end: date,
    days: int,
) -> WindowProgress:
    """Count scheduled, completed and missed days in the ``days`` ending at ``end``."""

    start = end - timedelta(days=days - 1)
    scheduled = completed = missed = 0
    for day in iter_days(max(start, habit.start_date), end):
        if not is_scheduled(habit.rule, day):
            continue
        scheduled += 1
        status = log.get(format_date(day))
        if status is DailyStatus.COMPLETED:
            completed += 1
        elif status is DailyStatus.MISSED:
            missed += 1
    return WindowProgress(start=start, end=end, scheduled=scheduled, completed=completed, missed=missed)


__all__ = [
    "AnalyticsSummary",
    "CalendarCell",
    "TIME_RANGE_DAYS",
    "WindowProgress",
    "month_calendar",
    "summarize",
    "window_progress",
]
