"""Conversion between recurrence rules and the ``target_days`` wire format.

The REST backend stores schedules as a list of day names, with the sentinel
``"Every Day"`` for daily habits.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.schedule import Frequency, RecurrenceRule, Weekday
from ..errors import InvalidRuleError

EVERY_DAY = "Every Day"

DAY_NAMES: dict[Weekday, str] = {
    Weekday.MON: "Monday",
    Weekday.TUE: "Tuesday",
    Weekday.WED: "Wednesday",
    Weekday.THU: "Thursday",
    Weekday.FRI: "Friday",
    Weekday.SAT: "Saturday",
    Weekday.SUN: "Sunday",
}
_BY_NAME = {name: day for day, name in DAY_NAMES.items()}

WEEKDAY_NAMES = [DAY_NAMES[day] for day in list(Weekday)[:5]]
WEEKEND_NAMES = [DAY_NAMES[Weekday.SAT], DAY_NAMES[Weekday.SUN]]


def rule_to_target_days(rule: RecurrenceRule) -> list[str]:
    if rule.frequency is Frequency.DAILY:
        return [EVERY_DAY]
    if rule.frequency is Frequency.WEEKDAYS:
        return list(WEEKDAY_NAMES)
    if rule.frequency is Frequency.WEEKENDS:
        return list(WEEKEND_NAMES)
    return [DAY_NAMES[day] for day in rule.sorted_days()]


def rule_from_target_days(target_days: Iterable[str]) -> RecurrenceRule:
    """Inverse of ``rule_to_target_days``.

    Only the exact Monday-Friday and Saturday-Sunday lists map to the weekday
    and weekend kinds; any other selection becomes a custom rule.
    """

    names = [str(name).strip() for name in target_days]
    if EVERY_DAY in names:
        return RecurrenceRule.daily()
    if names == WEEKDAY_NAMES:
        return RecurrenceRule.weekdays()
    if names == WEEKEND_NAMES:
        return RecurrenceRule.weekends()

    days = []
    for name in names:
        day = _BY_NAME.get(name.capitalize())
        if day is None:
            raise InvalidRuleError(f"Unknown day name: {name!r}")
        days.append(day)
    return RecurrenceRule.build(Frequency.CUSTOM, days)


__all__ = ["DAY_NAMES", "EVERY_DAY", "rule_from_target_days", "rule_to_target_days"]
