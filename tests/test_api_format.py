"""Tests for the target_days wire format and the quote of the day."""

from __future__ import annotations

from datetime import date

import pytest

from habitvault.domain.schedule import Frequency, RecurrenceRule, Weekday
from habitvault.errors import InvalidRuleError
from habitvault.services.api_format import EVERY_DAY, rule_from_target_days, rule_to_target_days
from habitvault.services.quotes import MOTIVATIONAL_QUOTES, daily_quote


class TestTargetDays:
    def test_daily_uses_sentinel(self):
        assert rule_to_target_days(RecurrenceRule.daily()) == [EVERY_DAY]

    def test_fixed_kinds_expand_to_names(self):
        assert rule_to_target_days(RecurrenceRule.weekends()) == ["Saturday", "Sunday"]
        assert rule_to_target_days(RecurrenceRule.weekdays())[0] == "Monday"
        assert len(rule_to_target_days(RecurrenceRule.weekdays())) == 5

    def test_custom_days_in_calendar_order(self):
        rule = RecurrenceRule.custom(["fri", "mon"])
        assert rule_to_target_days(rule) == ["Monday", "Friday"]

    @pytest.mark.parametrize(
        "rule",
        [
            RecurrenceRule.daily(),
            RecurrenceRule.weekdays(),
            RecurrenceRule.weekends(),
            RecurrenceRule.custom(["tue", "sat"]),
        ],
    )
    def test_parsing_inverts_formatting(self, rule):
        assert rule_from_target_days(rule_to_target_days(rule)) == rule

    def test_sentinel_wins_over_other_names(self):
        assert rule_from_target_days(["Monday", EVERY_DAY]) == RecurrenceRule.daily()

    def test_partial_workweek_is_custom(self):
        rule = rule_from_target_days(["Monday", "Tuesday"])
        assert rule.frequency is Frequency.CUSTOM
        assert rule.days == {Weekday.MON, Weekday.TUE}

    def test_lowercase_names_are_accepted(self):
        assert rule_from_target_days(["sunday"]).days == {Weekday.SUN}

    def test_unknown_name_rejected(self):
        with pytest.raises(InvalidRuleError):
            rule_from_target_days(["Caturday"])

    def test_empty_selection_rejected(self):
        with pytest.raises(InvalidRuleError):
            rule_from_target_days([])


class TestDailyQuote:
    def test_same_day_same_quote(self):
        assert daily_quote(date(2024, 3, 1)) == daily_quote(date(2024, 3, 1))

    def test_indexed_by_day_of_year(self):
        assert daily_quote(date(2024, 1, 1)) == MOTIVATIONAL_QUOTES[1]
        assert daily_quote(date(2024, 1, 20)) == MOTIVATIONAL_QUOTES[0]

    def test_defaults_to_today(self):
        assert daily_quote() in MOTIVATIONAL_QUOTES
