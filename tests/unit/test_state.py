"""
Unit tests for DualCalendarState.

Covers routing to the selected cursor, the optional secondary cursor,
configuration sharing, reset and clone.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from calendarcursor.config.models import CalendarConfig
from calendarcursor.config.settings import CalendarCursorSettings
from calendarcursor.exceptions import ConfigurationError
from calendarcursor.state import PRIMARY, SECONDARY, CursorSelector, DualCalendarState
from calendarcursor.utils.dates import WeekStart

FROZEN_NOW = datetime(2025, 3, 10, 8, 0)


class TestDualCalendarStateInit:
    """Test construction with and without a secondary cursor."""

    def test_primary_only(self, june_date):
        state = DualCalendarState(june_date)

        assert state.primary.date == june_date
        assert state.secondary is None
        assert not state.has_secondary
        assert state.cursor(SECONDARY) is None
        assert state.secondary_date is None

    def test_with_secondary(self, dual_state, june_date):
        assert dual_state.has_secondary
        assert dual_state.cursor(PRIMARY).date == june_date
        assert dual_state.cursor(SECONDARY).date == datetime(2024, 12, 1, 9, 0)
        assert dual_state.secondary.month == 11

    def test_default_config(self, june_date):
        state = DualCalendarState(june_date)
        assert state.config.week_start is WeekStart.MONDAY
        assert state.config.year_window_size == 9

    def test_cursors_share_config(self, dual_state):
        assert dual_state.primary.config is dual_state.config
        assert dual_state.secondary.config is dual_state.config

    def test_from_settings(self, june_date, tmp_path):
        settings = CalendarCursorSettings(
            config_dir=tmp_path, week_start="sunday", year_window_size=4
        )

        state = DualCalendarState.from_settings(settings, june_date)

        assert state.config.week_start is WeekStart.SUNDAY
        assert state.primary.years == (2021, 2022, 2023, 2024)
        assert not state.has_secondary

    def test_from_settings_invalid(self, tmp_path):
        settings = CalendarCursorSettings(config_dir=tmp_path, year_window_size=0)

        with pytest.raises(ConfigurationError):
            DualCalendarState.from_settings(settings)


class TestDualCalendarStateRouting:
    """Test that operations reach only the selected cursor."""

    def test_primary_is_default(self, dual_state):
        dual_state.set_month(0)

        assert dual_state.primary.month == 0
        assert dual_state.secondary.month == 11

    def test_secondary_mutation_leaves_primary_untouched(self, dual_state):
        before = dual_state.primary.snapshot()

        dual_state.set_day(20, SECONDARY)
        dual_state.set_week(0, SECONDARY)
        dual_state.set_month(3, SECONDARY)
        dual_state.set_year(2019, SECONDARY)
        dual_state.shift_by_days(40, SECONDARY)
        dual_state.shift_by_weeks(-2, SECONDARY)
        dual_state.shift_by_months(5, SECONDARY)
        dual_state.shift_by_years(3, SECONDARY)

        assert dual_state.primary.snapshot() == before

    def test_primary_mutation_leaves_secondary_untouched(self, dual_state):
        before = dual_state.secondary.snapshot()

        dual_state.set_date(datetime(2001, 1, 1))
        dual_state.shift_by_years(-5)

        assert dual_state.secondary.snapshot() == before

    def test_selector_accepts_enum_members(self, dual_state):
        dual_state.set_day(5, CursorSelector.SECONDARY)
        assert dual_state.secondary.day == 5

    def test_secondary_created_on_first_use(self, june_date):
        state = DualCalendarState(june_date)

        state.set_date(datetime(2024, 8, 20), SECONDARY)

        assert state.has_secondary
        assert state.secondary.date == datetime(2024, 8, 20)
        assert state.secondary.days == tuple(range(1, 32))

    def test_relative_mutation_creates_secondary_at_now(self, june_date):
        state = DualCalendarState(june_date)

        with patch("calendarcursor.state.datetime") as mock_datetime:
            mock_datetime.now.return_value = FROZEN_NOW
            state.shift_by_days(1, SECONDARY)

        assert state.secondary.date == datetime(2025, 3, 11, 8, 0)
        assert state.primary.date == june_date

    def test_routed_queries(self, dual_state):
        assert dual_state.get_month_range(SECONDARY) == (
            datetime(2024, 12, 1),
            datetime(2024, 12, 31, 23, 59, 59, 999999),
        )
        assert dual_state.get_year_range()[0] == datetime(2024, 1, 1)
        assert dual_state.get_week_range(SECONDARY)[0] == datetime(2024, 11, 25)
        assert dual_state.get_trailing_twelve_months_range(SECONDARY)[0] == datetime(
            2024, 1, 1, 9, 0
        )
        assert dual_state.weekday_name(1, SECONDARY) == "Su"
        assert dual_state.month_name(1) == "Fév."

    def test_derive_period_range(self, dual_state, june_date):
        assert dual_state.derive_period_range() == (june_date, datetime(2024, 12, 1, 9, 0))

    def test_derive_period_range_does_not_order(self, june_date):
        state = DualCalendarState(june_date, datetime(2020, 1, 1))
        assert state.derive_period_range() == (june_date, datetime(2020, 1, 1))

    def test_derive_period_range_without_secondary(self, june_date):
        assert DualCalendarState(june_date).derive_period_range() == (june_date, None)


class TestDualCalendarStateLifecycle:
    """Test reset, clone and reconfigure."""

    def test_reset_without_secondary_keeps_it_absent(self, june_date):
        state = DualCalendarState(june_date)

        with patch("calendarcursor.state.datetime") as mock_datetime:
            mock_datetime.now.return_value = FROZEN_NOW
            state.reset(False)

        assert state.primary.date == FROZEN_NOW
        assert state.primary.years == tuple(range(2017, 2026))
        assert not state.has_secondary

    def test_reset_creates_secondary_when_requested(self, june_date):
        state = DualCalendarState(june_date)

        with patch("calendarcursor.state.datetime") as mock_datetime:
            mock_datetime.now.return_value = FROZEN_NOW
            state.reset(True)

        assert state.has_secondary
        assert state.secondary.date == FROZEN_NOW
        assert state.secondary.month == 2

    def test_reset_refreshes_existing_secondary(self, dual_state):
        with patch("calendarcursor.state.datetime") as mock_datetime:
            mock_datetime.now.return_value = FROZEN_NOW
            dual_state.reset()

        assert dual_state.primary.date == FROZEN_NOW
        assert dual_state.secondary.date == FROZEN_NOW

    def test_reset_uses_current_moment(self, june_date):
        state = DualCalendarState(june_date)
        before = datetime.now()

        state.reset(True)

        after = datetime.now()
        assert before <= state.primary.date <= after
        assert before <= state.secondary.date <= after

    def test_clone_is_independent(self, dual_state):
        clone = dual_state.clone()

        assert clone is not dual_state
        assert clone.primary is not dual_state.primary
        assert clone.snapshot() == dual_state.snapshot()

        clone.shift_by_months(2)
        clone.set_day(3, SECONDARY)

        assert dual_state.primary.month == 5
        assert dual_state.secondary.day == 1

    def test_clone_shares_config_reference(self, dual_state):
        assert dual_state.clone().config is dual_state.config

    def test_clone_without_secondary(self, june_date):
        assert not DualCalendarState(june_date).clone().has_secondary

    def test_reconfigure_does_not_rederive(self, dual_state):
        weeks_before = dual_state.primary.weeks

        config = dual_state.reconfigure(week_start="sunday", year_window_size=3)

        assert config is dual_state.config
        assert config.week_start is WeekStart.SUNDAY
        assert dual_state.primary.weeks == weeks_before
        assert len(dual_state.secondary.years) == 9

        dual_state.set_date(dual_state.primary.date)
        assert dual_state.primary.weeks == (0, 1, 2, 3, 4, 5)
        assert dual_state.primary.years == (2022, 2023, 2024)
        assert len(dual_state.secondary.years) == 9

    def test_reconfigure_affects_both_cursors(self, dual_state):
        dual_state.reconfigure(year_window_size=2)

        dual_state.reset()

        assert len(dual_state.primary.years) == 2
        assert len(dual_state.secondary.years) == 2

    def test_reconfigure_invalid_value(self, dual_state):
        with pytest.raises(ConfigurationError) as exc_info:
            dual_state.reconfigure(year_window_size=0)

        assert exc_info.value.field_name == "year_window_size"
        assert dual_state.config.year_window_size == 9

    def test_reconfigure_partial_failure_keeps_config(self, dual_state):
        """Test that a valid change is not applied when another change in the call fails."""
        with pytest.raises(ConfigurationError) as exc_info:
            dual_state.reconfigure(week_start="sunday", year_window_size=0)

        assert exc_info.value.field_name == "year_window_size"
        assert dual_state.config.week_start is WeekStart.MONDAY
        assert dual_state.config.year_window_size == 9

    def test_reconfigure_unknown_field(self, dual_state):
        with pytest.raises(ConfigurationError, match="Unknown configuration field"):
            dual_state.reconfigure(first_day="monday")

    def test_reconfigure_unknown_field_keeps_config(self, dual_state):
        with pytest.raises(ConfigurationError):
            dual_state.reconfigure(week_start="sunday", first_day="monday")

        assert dual_state.config.week_start is WeekStart.MONDAY

    def test_explicit_config_is_used(self, june_date):
        config = CalendarConfig(year_window_size=1)
        state = DualCalendarState(june_date, config=config)

        assert state.config is config
        assert state.primary.years == (2024,)

    def test_snapshot(self, june_date):
        snapshot = DualCalendarState(june_date).snapshot()

        assert snapshot["week_start"] == "monday"
        assert snapshot["primary"]["day"] == 15
        assert snapshot["secondary"] is None
