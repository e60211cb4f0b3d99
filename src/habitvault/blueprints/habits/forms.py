"""Habit request payload definitions."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ...domain.dates import parse_iso_date
from ...domain.habit import DailyStatus
from ...domain.schedule import Frequency, RecurrenceRule
from ...services.api_format import rule_from_target_days


class HabitForm(BaseModel):
    """Create/update payload for a habit.

    The schedule is given either as ``frequency`` (+ ``customDays``) or as the
    legacy ``target_days`` list of day names. All fields are optional so the
    same model serves partial updates; creation checks required fields.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=100)
    frequency: Optional[Frequency] = None
    custom_days: Optional[list[str]] = Field(
        default=None, validation_alias=AliasChoices("customDays", "custom_days")
    )
    target_days: Optional[list[str]] = Field(
        default=None, validation_alias=AliasChoices("target_days", "targetDays")
    )
    start_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("startDate", "start_date")
    )

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start_date(cls, value: object) -> object:
        """Accept only canonical YYYY-MM-DD strings."""

        if value is None or isinstance(value, date):
            return value
        return parse_iso_date(value)  # type: ignore[arg-type]

    def to_rule(self) -> RecurrenceRule | None:
        """Return the schedule described by the payload, if any."""

        if self.target_days is not None:
            return rule_from_target_days(self.target_days)
        if self.frequency is not None:
            return RecurrenceRule.build(self.frequency, self.custom_days)
        if self.custom_days:
            return RecurrenceRule.build(Frequency.CUSTOM, self.custom_days)
        return None

    def missing_for_create(self) -> list[str]:
        missing = []
        if not self.name:
            missing.append("name")
        if self.start_date is None:
            missing.append("startDate")
        return missing


class StatusForm(BaseModel):
    """Payload for marking a day's status."""

    status: DailyStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


__all__ = ["HabitForm", "StatusForm"]
