"""Recurrence rules and the check that decides whether a habit applies to a date."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable

from ..errors import InvalidRuleError


class Weekday(str, Enum):
    """Weekday symbols, declared in ``date.weekday()`` order."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the weekday symbol for a calendar date (ISO calendar)."""

        return _WEEK[day.weekday()]

    @classmethod
    def parse(cls, value: "str | Weekday") -> "Weekday":
        if isinstance(value, Weekday):
            return value
        text = str(value).strip().lower()
        try:
            return cls(_FULL_NAMES.get(text, text))
        except ValueError as exc:
            raise InvalidRuleError(f"Unknown weekday: {value!r}") from exc


_WEEK: tuple[Weekday, ...] = tuple(Weekday)
_FULL_NAMES = {
    "monday": "mon",
    "tuesday": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}
WORKWEEK = frozenset(_WEEK[:5])
WEEKEND = frozenset(_WEEK[5:])
ALL_DAYS = frozenset(_WEEK)


class Frequency(str, Enum):
    """Recurrence rule kinds."""

    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RecurrenceRule:
    """A frequency tag plus, for ``CUSTOM`` only, the set of scheduled weekdays."""

    frequency: Frequency
    days: frozenset[Weekday] = field(default_factory=frozenset)

    @classmethod
    def daily(cls) -> "RecurrenceRule":
        return cls(Frequency.DAILY)

    @classmethod
    def weekdays(cls) -> "RecurrenceRule":
        return cls(Frequency.WEEKDAYS)

    @classmethod
    def weekends(cls) -> "RecurrenceRule":
        return cls(Frequency.WEEKENDS)

    @classmethod
    def custom(cls, days: Iterable["str | Weekday"]) -> "RecurrenceRule":
        return cls(Frequency.CUSTOM, frozenset(Weekday.parse(day) for day in days))

    @classmethod
    def build(
        cls,
        frequency: "str | Frequency",
        days: Iterable["str | Weekday"] | None = None,
    ) -> "RecurrenceRule":
        """Validate and build a rule from loosely typed input.

        Custom rules need at least one weekday; the other kinds take none.
        """

        try:
            kind = Frequency(frequency)
        except ValueError as exc:
            raise InvalidRuleError(f"Unknown frequency: {frequency!r}") from exc
        parsed = frozenset(Weekday.parse(day) for day in (days or ()))
        if kind is Frequency.CUSTOM and not parsed:
            raise InvalidRuleError("A custom schedule needs at least one weekday.")
        if kind is not Frequency.CUSTOM and parsed:
            raise InvalidRuleError(f"A {kind.value} schedule does not take weekdays.")
        return cls(kind, parsed)

    def scheduled_weekdays(self) -> frozenset[Weekday]:
        """Return the weekdays on which this rule schedules the habit."""

        if self.frequency is Frequency.CUSTOM:
            return self.days
        return _FIXED_WEEKDAYS[self.frequency]

    def sorted_days(self) -> list[Weekday]:
        """Custom weekdays in calendar order (empty for fixed kinds)."""

        return [day for day in _WEEK if day in self.days]


_FIXED_WEEKDAYS: dict[Frequency, frozenset[Weekday]] = {
    Frequency.DAILY: ALL_DAYS,
    Frequency.WEEKDAYS: WORKWEEK,
    Frequency.WEEKENDS: WEEKEND,
}


def is_scheduled(rule: RecurrenceRule, day: date) -> bool:
    """Return True when ``rule`` expects the habit to be acted upon on ``day``.

    A custom rule with no weekdays schedules nothing.
    """

    return Weekday.of(day) in rule.scheduled_weekdays()


__all__ = [
    "ALL_DAYS",
    "Frequency",
    "RecurrenceRule",
    "WEEKEND",
    "WORKWEEK",
    "Weekday",
    "is_scheduled",
]
