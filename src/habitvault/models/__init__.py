"""SQLModel table exports."""

from .habit import Habit, HabitLogEntry
from .preferences import UserPreference
from .user import User

__all__ = [
    "Habit",
    "HabitLogEntry",
    "User",
    "UserPreference",
]
