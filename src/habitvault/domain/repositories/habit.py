"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol

from ...models.habit import Habit
from ..habit import DailyStatus, HabitLog


class HabitRepository(Protocol):
    """Repository for managing habit entities and their daily logs."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List the user's habits in creation order."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit and its log."""
        ...

    # Log operations
    def get_log(self, habit_id: int, *, user_id: int) -> HabitLog:
        """Return the habit's log keyed by ISO date."""
        ...

    def get_logs(self, habit_ids: Iterable[int], *, user_id: int) -> dict[int, HabitLog]:
        """Return logs for several habits at once."""
        ...

    def set_status(
        self, habit_id: int, day: date, status: DailyStatus, *, user_id: int
    ) -> None:
        """Create or overwrite the log entry for one day."""
        ...
