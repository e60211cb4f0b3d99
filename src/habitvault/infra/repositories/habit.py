"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from sqlmodel import select

from ...domain.dates import format_date
from ...domain.habit import DailyStatus, HabitLog
from ...models.habit import Habit, HabitLogEntry
from ..database import SessionFactory


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List the user's habits in creation order."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at, Habit.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit together with its log entries."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return
            entries = session.exec(
                select(HabitLogEntry).where(HabitLogEntry.habit_id == habit_id)
            ).all()
            for entry in entries:
                session.delete(entry)
            session.delete(habit)
            session.commit()

    # Log operations
    def get_log(self, habit_id: int, *, user_id: int) -> HabitLog:
        """Return the habit's log keyed by ISO date."""
        return self.get_logs([habit_id], user_id=user_id).get(habit_id, {})

    def get_logs(self, habit_ids: Iterable[int], *, user_id: int) -> dict[int, HabitLog]:
        """Return logs for several habits in one query."""
        ids = list(habit_ids)
        logs: dict[int, HabitLog] = {habit_id: {} for habit_id in ids}
        if not ids:
            return logs
        with self.session_factory() as session:
            statement = (
                select(HabitLogEntry)
                .where(HabitLogEntry.user_id == user_id)
                .where(HabitLogEntry.habit_id.in_(ids))  # type: ignore[attr-defined]
            )
            for entry in session.exec(statement).all():
                logs[entry.habit_id][format_date(entry.day)] = DailyStatus(entry.status)
        return logs

    def set_status(
        self, habit_id: int, day: date, status: DailyStatus, *, user_id: int
    ) -> HabitLogEntry:
        """Insert or overwrite the log entry for one day."""
        with self.session_factory() as session:
            existing = session.exec(
                select(HabitLogEntry)
                .where(HabitLogEntry.user_id == user_id)
                .where(HabitLogEntry.habit_id == habit_id)
                .where(HabitLogEntry.day == day)
            ).first()

            if existing:
                existing.status = status.value
                entry = existing
            else:
                entry = HabitLogEntry(
                    habit_id=habit_id, day=day, user_id=user_id, status=status.value
                )
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry


__all__ = ["SQLModelHabitRepository"]
