"""Demo data seeding for local development."""

from __future__ import annotations

import random
from datetime import date, timedelta

from ..domain.habit import DailyStatus
from ..domain.schedule import RecurrenceRule, Weekday, is_scheduled
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.user import User
from . import auth
from .habits import HabitTracker

logger = get_logger(__name__)

DEMO_EMAIL = "demo@habitvault.local"
DEMO_PASSWORD = "demo-password"
DEMO_HABITS = (
    ("Morning run", RecurrenceRule.weekdays()),
    ("Read 20 pages", RecurrenceRule.daily()),
    ("Meal prep", RecurrenceRule.weekends()),
    ("Guitar practice", RecurrenceRule.custom([Weekday.MON, Weekday.WED, Weekday.FRI])),
)


def seed_demo_data(
    session_factory: SessionFactory,
    *,
    today: date | None = None,
    days: int = 60,
    seed: int = 7,
) -> User:
    """Create (or reuse) the demo user and give it habits with a plausible history.

    Existing demo habits are left untouched, so running twice is harmless.
    """

    today = today or date.today()
    user = auth.get_user_by_email(DEMO_EMAIL, session_factory)
    if user is None:
        user = auth.register_user(
            email=DEMO_EMAIL,
            password=DEMO_PASSWORD,
            name="Demo",
            session_factory=session_factory,
        )

    tracker = HabitTracker(session_factory, user.id, today_provider=lambda: today)
    existing = {snap.definition.name for snap in tracker.list_habits()}
    rng = random.Random(seed)
    start = today - timedelta(days=days)

    for name, rule in DEMO_HABITS:
        if name in existing:
            continue
        snap = tracker.add_habit(name, rule, start)
        habit_id = int(snap.definition.id)
        cursor = start
        while cursor < today:
            if is_scheduled(rule, cursor):
                status = DailyStatus.COMPLETED if rng.random() < 0.75 else DailyStatus.MISSED
                tracker.mark_status(habit_id, cursor, status)
            cursor += timedelta(days=1)

    logger.info("Demo data seeded", extra={"user_id": user.id, "days": days})
    return user


__all__ = ["DEMO_EMAIL", "DEMO_PASSWORD", "seed_demo_data"]
