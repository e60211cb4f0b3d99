"""Habit tracking service: CRUD, status marking and metric recomputation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..domain.analytics import (
    TIME_RANGE_DAYS,
    AnalyticsSummary,
    CalendarCell,
    WindowProgress,
    month_calendar,
    summarize,
    window_progress,
)
from ..domain.dates import format_date, parse_iso_date
from ..domain.habit import DailyStatus, DerivedMetrics, HabitDefinition, HabitLog
from ..domain.repositories.habit import HabitRepository
from ..domain.schedule import RecurrenceRule
from ..domain.streaks import compute_metrics
from ..errors import HabitVaultError, NotFoundError
from ..infra.database import SessionFactory
from ..infra.repositories.habit import SQLModelHabitRepository
from ..logging_config import get_logger
from ..models.habit import Habit

logger = get_logger(__name__)

MAX_NAME_LENGTH = 100


@dataclass(frozen=True)
class HabitSnapshot:
    """A habit, its log and the metrics derived from them at one point in time."""

    definition: HabitDefinition
    log: HabitLog
    metrics: DerivedMetrics

    def to_dict(self) -> dict[str, object]:
        habit = self.definition
        created = habit.created_at.isoformat() if habit.created_at else None
        payload: dict[str, object] = {
            "id": habit.id,
            "name": habit.name,
            "frequency": habit.rule.frequency.value,
            "customDays": [day.value for day in habit.rule.sorted_days()] or None,
            "startDate": format_date(habit.start_date),
            "createdAt": created,
            "logs": {day: status.value for day, status in sorted(self.log.items())},
        }
        payload.update(self.metrics.to_dict())
        return payload


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise HabitVaultError("Please provide a habit name.")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise HabitVaultError(f"Habit names are limited to {MAX_NAME_LENGTH} characters.")
    return cleaned


def _validated(rule: RecurrenceRule) -> RecurrenceRule:
    """Reject rules that cannot be stored, such as a custom rule with no weekdays."""

    return RecurrenceRule.build(rule.frequency, rule.days)


class HabitTracker:
    """Per-user habit session.

    Holds no cached state: every call reads the current habits and logs from
    the repository and recomputes metrics against ``today_provider()``, which
    is resolved at call time so long-lived trackers do not drift across
    midnight.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        user_id: int,
        *,
        today_provider: Callable[[], date] = date.today,
        repository: Optional[HabitRepository] = None,
    ) -> None:
        self.user_id = user_id
        self.today_provider = today_provider
        self.repo: HabitRepository = repository or SQLModelHabitRepository(session_factory)

    def today(self) -> date:
        return self.today_provider()

    # Queries
    def list_habits(self) -> list[HabitSnapshot]:
        habits = self.repo.list_all(user_id=self.user_id)
        logs = self.repo.get_logs(
            [habit.id for habit in habits if habit.id is not None], user_id=self.user_id
        )
        today = self.today()
        return [self._snapshot(habit, logs.get(habit.id, {}), today) for habit in habits]

    def get_habit(self, habit_id: int) -> HabitSnapshot:
        habit = self._require(habit_id)
        return self._snapshot(habit, self.repo.get_log(habit_id, user_id=self.user_id), self.today())

    def summary(self) -> AnalyticsSummary:
        return summarize(self.list_habits())

    def progress(self, time_range: str = "week") -> list[tuple[HabitSnapshot, WindowProgress]]:
        """Per-habit progress over the week, month or year ending today."""

        try:
            days = TIME_RANGE_DAYS[time_range]
        except KeyError as exc:
            raise HabitVaultError(
                f"Time range must be one of {', '.join(TIME_RANGE_DAYS)}"
            ) from exc
        today = self.today()
        return [
            (snap, window_progress(snap.definition, snap.log, today, days))
            for snap in self.list_habits()
        ]

    def month_calendar(self, habit_id: int, year: int, month: int) -> list[CalendarCell]:
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise HabitVaultError("Month must be 1-12 and year 1-9999.")
        snap = self.get_habit(habit_id)
        return month_calendar(snap.definition, snap.log, year, month, self.today())

    # Mutations
    def add_habit(self, name: str, rule: RecurrenceRule, start_date: date | str) -> HabitSnapshot:
        habit = Habit(
            user_id=self.user_id,
            name=_clean_name(name),
            start_date=parse_iso_date(start_date),
        )
        habit.apply_rule(_validated(rule))
        habit = self.repo.create(habit, user_id=self.user_id)
        logger.info(
            "Habit created",
            extra={"user_id": self.user_id, "habit_id": habit.id, "frequency": habit.frequency},
        )
        return self._snapshot(habit, {}, self.today())

    def update_habit(
        self,
        habit_id: int,
        *,
        name: str | None = None,
        rule: RecurrenceRule | None = None,
        start_date: date | str | None = None,
    ) -> HabitSnapshot:
        """Edit a habit and recompute its metrics against the existing log."""

        habit = self._require(habit_id)
        if name is not None:
            habit.name = _clean_name(name)
        if rule is not None:
            habit.apply_rule(_validated(rule))
        if start_date is not None:
            habit.start_date = parse_iso_date(start_date)
        self.repo.update(habit, user_id=self.user_id)
        logger.info("Habit updated", extra={"user_id": self.user_id, "habit_id": habit_id})
        return self.get_habit(habit_id)

    def delete_habit(self, habit_id: int) -> None:
        self._require(habit_id)
        self.repo.delete(habit_id, user_id=self.user_id)
        logger.info("Habit deleted", extra={"user_id": self.user_id, "habit_id": habit_id})

    def mark_status(
        self, habit_id: int, day: date | str, status: DailyStatus | str
    ) -> HabitSnapshot:
        """Record ``status`` for ``day`` (overwriting any earlier mark) and recompute."""

        habit = self._require(habit_id)
        parsed_day = parse_iso_date(day)
        parsed_status = DailyStatus.parse(status)
        self.repo.set_status(habit_id, parsed_day, parsed_status, user_id=self.user_id)
        logger.info(
            "Habit status marked",
            extra={
                "user_id": self.user_id,
                "habit_id": habit_id,
                "day": format_date(parsed_day),
                "status": parsed_status.value,
            },
        )
        return self._snapshot(habit, self.repo.get_log(habit_id, user_id=self.user_id), self.today())

    # Helpers
    def _require(self, habit_id: int) -> Habit:
        habit = self.repo.get_by_id(habit_id, user_id=self.user_id)
        if habit is None:
            raise NotFoundError(f"Habit {habit_id} not found")
        return habit

    @staticmethod
    def _snapshot(habit: Habit, log: HabitLog, today: date) -> HabitSnapshot:
        definition = habit.to_definition()
        return HabitSnapshot(
            definition=definition,
            log=dict(log),
            metrics=compute_metrics(definition, log, today),
        )


__all__ = ["HabitSnapshot", "HabitTracker"]
