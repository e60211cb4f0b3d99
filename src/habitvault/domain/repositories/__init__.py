"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .preferences import PreferencesRepository

__all__ = [
    "HabitRepository",
    "PreferencesRepository",
]
