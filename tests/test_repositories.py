"""Tests for the SQLModel habit and preferences repositories."""

from __future__ import annotations

from datetime import date

import pytest

from habitvault.domain.habit import DailyStatus
from habitvault.domain.schedule import Frequency, RecurrenceRule, Weekday
from habitvault.errors import HabitVaultError
from habitvault.infra.repositories.habit import SQLModelHabitRepository
from habitvault.infra.repositories.preferences import SQLModelPreferencesRepository
from habitvault.models.habit import Habit


class TestHabitRepository:
    def test_create_and_get(self, session_factory, user):
        repo = SQLModelHabitRepository(session_factory)
        habit = Habit(name="Stretch", start_date=date(2024, 1, 1))
        habit.apply_rule(RecurrenceRule.custom(["wed", "mon"]))

        created = repo.create(habit, user_id=user.id)
        fetched = repo.get_by_id(created.id, user_id=user.id)

        assert fetched is not None
        assert fetched.name == "Stretch"
        assert fetched.custom_days == "mon,wed"
        assert fetched.rule == RecurrenceRule(Frequency.CUSTOM, frozenset({Weekday.MON, Weekday.WED}))

    def test_habits_are_scoped_to_owner(self, session_factory, habit_factory, user, other_user):
        mine = habit_factory(name="Mine")
        habit_factory(name="Theirs", owner=other_user)
        repo = SQLModelHabitRepository(session_factory)

        assert [h.name for h in repo.list_all(user_id=user.id)] == ["Mine"]
        assert repo.get_by_id(mine.id, user_id=other_user.id) is None

    def test_list_in_creation_order(self, session_factory, habit_factory, user):
        for name in ("A", "B", "C"):
            habit_factory(name=name)
        repo = SQLModelHabitRepository(session_factory)
        assert [h.name for h in repo.list_all(user_id=user.id)] == ["A", "B", "C"]

    def test_update(self, session_factory, habit_factory, user):
        habit = habit_factory(name="Old")
        repo = SQLModelHabitRepository(session_factory)

        loaded = repo.get_by_id(habit.id, user_id=user.id)
        loaded.name = "New"
        loaded.apply_rule(RecurrenceRule.weekends())
        repo.update(loaded, user_id=user.id)

        refreshed = repo.get_by_id(habit.id, user_id=user.id)
        assert refreshed.name == "New"
        assert refreshed.rule == RecurrenceRule.weekends()
        assert refreshed.custom_days == ""

    def test_set_status_upserts(self, session_factory, habit_factory, user):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)
        day = date(2024, 1, 3)

        repo.set_status(habit.id, day, DailyStatus.COMPLETED, user_id=user.id)
        repo.set_status(habit.id, day, DailyStatus.MISSED, user_id=user.id)

        assert repo.get_log(habit.id, user_id=user.id) == {"2024-01-03": DailyStatus.MISSED}

    def test_get_logs_for_several_habits(self, session_factory, habit_factory, user):
        first = habit_factory(name="One")
        second = habit_factory(name="Two")
        repo = SQLModelHabitRepository(session_factory)
        repo.set_status(first.id, date(2024, 1, 1), DailyStatus.COMPLETED, user_id=user.id)

        logs = repo.get_logs([first.id, second.id], user_id=user.id)
        assert logs == {first.id: {"2024-01-01": DailyStatus.COMPLETED}, second.id: {}}
        assert repo.get_logs([], user_id=user.id) == {}

    def test_delete_removes_log(self, session_factory, habit_factory, user):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)
        repo.set_status(habit.id, date(2024, 1, 1), DailyStatus.COMPLETED, user_id=user.id)

        repo.delete(habit.id, user_id=user.id)

        assert repo.get_by_id(habit.id, user_id=user.id) is None
        assert repo.get_log(habit.id, user_id=user.id) == {}

    def test_delete_ignores_other_owner(self, session_factory, habit_factory, user, other_user):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)
        repo.delete(habit.id, user_id=other_user.id)
        assert repo.get_by_id(habit.id, user_id=user.id) is not None


class TestPreferencesRepository:
    def test_defaults_without_row(self, session_factory, user):
        prefs = SQLModelPreferencesRepository(session_factory).get(user_id=user.id)
        assert prefs.to_dict() == {
            "darkMode": False,
            "lastTimeRange": "week",
            "showMotivationalQuote": True,
        }

    def test_update_persists(self, session_factory, user):
        repo = SQLModelPreferencesRepository(session_factory)
        repo.update(user_id=user.id, dark_mode=True, last_time_range="month")
        repo.update(user_id=user.id, show_motivational_quote=False)

        prefs = repo.get(user_id=user.id)
        assert prefs.dark_mode is True
        assert prefs.last_time_range == "month"
        assert prefs.show_motivational_quote is False

    def test_update_rejects_unknown_range(self, session_factory, user):
        with pytest.raises(HabitVaultError):
            SQLModelPreferencesRepository(session_factory).update(
                user_id=user.id, last_time_range="decade"
            )

    def test_update_rejects_unknown_field(self, session_factory, user):
        with pytest.raises(HabitVaultError):
            SQLModelPreferencesRepository(session_factory).update(user_id=user.id, theme="blue")
