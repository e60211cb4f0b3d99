"""Habits tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..domain.habit import HabitDefinition
from ..domain.schedule import Frequency, RecurrenceRule, Weekday

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A user-defined habit with its recurrence schedule."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    frequency: str = Field(default=Frequency.DAILY.value, max_length=16, nullable=False)
    # Comma-joined weekday symbols in calendar order; empty unless frequency is custom.
    custom_days: str = Field(default="", max_length=32, nullable=False)
    start_date: date = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    entries: list["HabitLogEntry"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship("HabitLogEntry", back_populates="habit"),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))

    @property
    def rule(self) -> RecurrenceRule:
        days = frozenset(Weekday.parse(part) for part in self.custom_days.split(",") if part)
        return RecurrenceRule(Frequency(self.frequency), days)

    def apply_rule(self, rule: RecurrenceRule) -> None:
        self.frequency = rule.frequency.value
        self.custom_days = ",".join(day.value for day in rule.sorted_days())

    def to_definition(self) -> HabitDefinition:
        return HabitDefinition(
            id=str(self.id),
            name=self.name,
            rule=self.rule,
            start_date=self.start_date,
            created_at=self.created_at,
        )


class HabitLogEntry(SQLModel, table=True):
    """Recorded status for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_log_entry"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    day: date = Field(primary_key=True, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    status: str = Field(nullable=False, max_length=16)

    habit: "Habit" = Relationship(
        back_populates="entries",
        sa_relationship=relationship("Habit", back_populates="entries"),
    )
