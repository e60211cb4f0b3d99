"""Preferences repository for per-user dashboard settings."""

from __future__ import annotations

from typing import Any

from sqlmodel import select

from ...errors import HabitVaultError
from ...models.preferences import TIME_RANGES, UserPreference
from ..database import SessionFactory

_FIELDS = {"dark_mode", "last_time_range", "show_motivational_quote"}


class SQLModelPreferencesRepository:
    """SQLModel-based preferences repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, *, user_id: int) -> UserPreference:
        with self.session_factory() as session:
            prefs = session.exec(
                select(UserPreference).where(UserPreference.user_id == user_id)
            ).first()
            if prefs is None:
                return UserPreference(user_id=user_id)
            session.expunge(prefs)
            return prefs

    def update(self, *, user_id: int, **changes: Any) -> UserPreference:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise HabitVaultError(f"Unknown preference fields: {', '.join(sorted(unknown))}")
        time_range = changes.get("last_time_range")
        if time_range is not None and time_range not in TIME_RANGES:
            raise HabitVaultError(f"last_time_range must be one of {', '.join(TIME_RANGES)}")

        with self.session_factory() as session:
            prefs = session.exec(
                select(UserPreference).where(UserPreference.user_id == user_id)
            ).first()
            if prefs is None:
                prefs = UserPreference(user_id=user_id)
            for key, value in changes.items():
                if value is not None:
                    setattr(prefs, key, value)
            session.add(prefs)
            session.commit()
            session.refresh(prefs)
            session.expunge(prefs)
            return prefs


__all__ = ["SQLModelPreferencesRepository"]
