"""Pure habit scheduling and streak engine."""

from .habit import DailyStatus, DerivedMetrics, HabitDefinition, HabitLog, normalize_log
from .schedule import Frequency, RecurrenceRule, Weekday, is_scheduled
from .streaks import compute_completion_rate, compute_metrics, compute_streaks

__all__ = [
    "DailyStatus",
    "DerivedMetrics",
    "Frequency",
    "HabitDefinition",
    "HabitLog",
    "RecurrenceRule",
    "Weekday",
    "compute_completion_rate",
    "compute_metrics",
    "compute_streaks",
    "is_scheduled",
    "normalize_log",
]
