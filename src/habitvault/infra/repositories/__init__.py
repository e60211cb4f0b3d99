"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .preferences import SQLModelPreferencesRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelPreferencesRepository",
]
