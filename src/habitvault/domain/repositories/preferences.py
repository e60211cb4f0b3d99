"""Preferences repository protocol."""

from __future__ import annotations

from typing import Any, Protocol

from ...models.preferences import UserPreference


class PreferencesRepository(Protocol):
    """Repository for per-user display preferences."""

    def get(self, *, user_id: int) -> UserPreference:
        """Return stored preferences, or defaults when none are saved."""
        ...

    def update(self, *, user_id: int, **changes: Any) -> UserPreference:
        """Apply a partial update and return the stored preferences."""
        ...
