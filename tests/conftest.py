"""Pytest configuration and shared fixtures for HabitVault tests.

Database fixtures give each test a fresh temporary SQLite file so repositories,
services and routes can be exercised without touching a real data directory.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitvault import create_app
from habitvault.config import TestConfig
from habitvault.domain.schedule import RecurrenceRule
from habitvault.models import Habit, HabitLogEntry, User, UserPreference  # noqa: F401
from habitvault.services.habits import HabitTracker

# Monday
FIXED_TODAY = date(2024, 1, 15)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Plain session for arranging test data directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching ``infra.database.create_session_factory``.

    Returns:
        Callable: Factory function that returns session context managers
    """

    @contextmanager
    def session_context():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def factory():
        return session_context()

    return factory


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""

    u = User(email="tester@example.com", name="Tester", password_hash="dummy-hash")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def other_user(db_session) -> User:
    u = User(email="someone-else@example.com", password_hash="dummy-hash")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit rows
    """

    def _create_habit(
        name: str = "Test Habit",
        rule: RecurrenceRule | None = None,
        start_date: date = date(2024, 1, 1),
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(user_id=owner.id, name=name, start_date=start_date)
        habit.apply_rule(rule or RecurrenceRule.daily())
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def tracker(session_factory, user) -> HabitTracker:
    """Tracker for the default user pinned to ``FIXED_TODAY``."""

    return HabitTracker(session_factory, user.id, today_provider=lambda: FIXED_TODAY)


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app():
    """App backed by ``TestConfig``'s throwaway data directory."""
    application = create_app(config=TestConfig())
    yield application
    application.extensions["habitvault"]["engine"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register a user through the API and return bearer auth headers."""

    response = client.post(
        "/api/auth/register",
        json={"email": "api-user@example.com", "password": "s3cret-pass", "name": "Api"},
    )
    assert response.status_code == 201
    token = response.get_json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
