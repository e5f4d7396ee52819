"""Invalidation levels and the recompute plan each one triggers.

Every cursor mutation is tagged with an ``InvalidationLevel``. The level decides
which derived fields are rebuilt:

    ======== =====================================================================
    level    recomputes
    ======== =====================================================================
    DAY      day, week_of_month (years only if the cached window went stale)
    WEEK     day, week_of_month (years only if the cached window went stale)
    MONTH    day, week_of_month, days, weeks, month, year (years if stale)
    YEAR     same as MONTH, years unconditionally
    ALL      same as YEAR
    ======== =====================================================================

DAY and WEEK stay narrow even when the mutation moved the date into another
month. ``plan_recompute`` with ``escalate_month_crossings=True`` promotes such
mutations to MONTH.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InvalidationLevel(Enum):
    """Granularity of recomputation triggered by a mutation."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class YearsRefresh(Enum):
    """When the cached years window is rebuilt."""

    IF_STALE = "if_stale"
    ALWAYS = "always"


@dataclass(frozen=True)
class RecomputePlan:
    """Derived fields to rebuild after a mutation."""

    level: InvalidationLevel
    month_fields: bool
    years: YearsRefresh


_PLANS = {
    InvalidationLevel.DAY: RecomputePlan(InvalidationLevel.DAY, False, YearsRefresh.IF_STALE),
    InvalidationLevel.WEEK: RecomputePlan(InvalidationLevel.WEEK, False, YearsRefresh.IF_STALE),
    InvalidationLevel.MONTH: RecomputePlan(InvalidationLevel.MONTH, True, YearsRefresh.IF_STALE),
    InvalidationLevel.YEAR: RecomputePlan(InvalidationLevel.YEAR, True, YearsRefresh.ALWAYS),
    InvalidationLevel.ALL: RecomputePlan(InvalidationLevel.ALL, True, YearsRefresh.ALWAYS),
}


def plan_recompute(
    level: InvalidationLevel,
    previous: datetime,
    current: datetime,
    escalate_month_crossings: bool = False,
) -> RecomputePlan:
    """Return the recompute plan for a mutation from ``previous`` to ``current``.

    Args:
        level: Invalidation level the mutation is tagged with
        previous: Cursor date before the mutation
        current: Cursor date after the mutation
        escalate_month_crossings: Promote DAY/WEEK mutations that left the
            month to MONTH level

    Returns:
        The plan describing which derived fields to rebuild
    """
    plan = _PLANS[level]
    if (
        escalate_month_crossings
        and not plan.month_fields
        and (previous.year, previous.month) != (current.year, current.month)
    ):
        return _PLANS[InvalidationLevel.MONTH]
    return plan
