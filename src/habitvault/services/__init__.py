"""Application services built on the habit engine."""

from .habits import HabitSnapshot, HabitTracker

__all__ = ["HabitSnapshot", "HabitTracker"]
