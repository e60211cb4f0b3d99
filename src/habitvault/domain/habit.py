"""Plain data structures for habits, their logs and derived metrics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping

from ..errors import InvalidStatusError
from .dates import format_date, parse_iso_date
from .schedule import RecurrenceRule


class DailyStatus(str, Enum):
    """Recorded outcome for a day. Untracked days have no log entry."""

    COMPLETED = "completed"
    MISSED = "missed"

    @classmethod
    def parse(cls, value: "str | DailyStatus") -> "DailyStatus":
        if isinstance(value, DailyStatus):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidStatusError(
                f"Status must be 'completed' or 'missed', got {value!r}"
            ) from exc


# ISO date string -> status; absent keys are untracked.
HabitLog = Dict[str, DailyStatus]


@dataclass(frozen=True)
class HabitDefinition:
    """What the engine needs to know about a habit."""

    id: str
    name: str
    rule: RecurrenceRule
    start_date: date
    created_at: datetime | None = None


@dataclass(frozen=True)
class DerivedMetrics:
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "completionRate": self.completion_rate,
        }


def normalize_log(raw: Mapping[Any, Any]) -> HabitLog:
    """Validate a loosely typed log into canonical keys and ``DailyStatus`` values.

    ``None`` values are treated as untracked and dropped. Malformed dates or
    statuses raise.
    """

    log: HabitLog = {}
    for key, value in raw.items():
        if value is None:
            continue
        day = parse_iso_date(key)
        log[format_date(day)] = DailyStatus.parse(value)
    return log


__all__ = [
    "DailyStatus",
    "DerivedMetrics",
    "HabitDefinition",
    "HabitLog",
    "normalize_log",
]
