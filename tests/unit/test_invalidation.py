"""Unit tests for invalidation levels and recompute plans."""

from datetime import datetime

import pytest

from calendarcursor.invalidation import (
    InvalidationLevel,
    YearsRefresh,
    plan_recompute,
)

SAME_MONTH = (datetime(2024, 6, 10), datetime(2024, 6, 20))
NEXT_MONTH = (datetime(2024, 6, 28), datetime(2024, 7, 5))


class TestPlanRecompute:
    """Test the level-to-plan table."""

    @pytest.mark.parametrize(
        ("level", "month_fields", "years"),
        [
            (InvalidationLevel.DAY, False, YearsRefresh.IF_STALE),
            (InvalidationLevel.WEEK, False, YearsRefresh.IF_STALE),
            (InvalidationLevel.MONTH, True, YearsRefresh.IF_STALE),
            (InvalidationLevel.YEAR, True, YearsRefresh.ALWAYS),
            (InvalidationLevel.ALL, True, YearsRefresh.ALWAYS),
        ],
    )
    def test_levels(self, level, month_fields, years):
        plan = plan_recompute(level, *SAME_MONTH)
        assert plan.level is level
        assert plan.month_fields is month_fields
        assert plan.years is years

    @pytest.mark.parametrize("level", [InvalidationLevel.DAY, InvalidationLevel.WEEK])
    def test_narrow_levels_stay_narrow_across_months_by_default(self, level):
        """Test that day/week mutations leaving the month are not escalated by default."""
        plan = plan_recompute(level, *NEXT_MONTH)
        assert plan.level is level
        assert not plan.month_fields

    @pytest.mark.parametrize("level", [InvalidationLevel.DAY, InvalidationLevel.WEEK])
    def test_escalation_promotes_month_crossings(self, level):
        plan = plan_recompute(level, *NEXT_MONTH, escalate_month_crossings=True)
        assert plan.level is InvalidationLevel.MONTH
        assert plan.month_fields

    def test_escalation_ignores_mutations_within_month(self):
        plan = plan_recompute(InvalidationLevel.WEEK, *SAME_MONTH, escalate_month_crossings=True)
        assert plan.level is InvalidationLevel.WEEK

    def test_escalation_detects_same_month_in_another_year(self):
        """Test that a move to the same month of another year counts as a crossing."""
        plan = plan_recompute(
            InvalidationLevel.DAY,
            datetime(2024, 6, 10),
            datetime(2025, 6, 10),
            escalate_month_crossings=True,
        )
        assert plan.level is InvalidationLevel.MONTH

    def test_escalation_keeps_wider_levels(self):
        plan = plan_recompute(InvalidationLevel.YEAR, *NEXT_MONTH, escalate_month_crossings=True)
        assert plan.level is InvalidationLevel.YEAR
        assert plan.years is YearsRefresh.ALWAYS
