"""Date cursor state with source-dependent recomputation of derived fields."""

import logging
from datetime import datetime
from typing import Any

from .config.models import CalendarConfig
from .invalidation import InvalidationLevel, RecomputePlan, YearsRefresh, plan_recompute
from .names import MONTHS, WEEKDAYS
from .utils import dates

logger = logging.getLogger(__name__)

MONTH_INDEXES = tuple(range(12))


class CalendarCursor:
    """Tracks one date and the calendar fields derived from it.

    The date is the source of truth. Scalar fields (day, week of month, month,
    year) and enumerations (days, weeks, months, years) are cached and only
    the fields a mutation can affect are rebuilt, as decided by the
    invalidation level of that mutation.

    All state is private; mutators are the only write path.
    """

    def __init__(self, initial_date: datetime, config: CalendarConfig, name: str = "primary"):
        """Initialize the cursor and derive every field.

        Args:
            initial_date: Date the cursor starts on
            config: Shared calendar configuration
            name: Label used in log messages
        """
        self._config = config
        self._name = name
        self._date = initial_date

        self._day = 0
        self._week_of_month = 0
        self._month = 0
        self._year = 0
        self._days: tuple[int, ...] = ()
        self._weeks: tuple[int, ...] = ()
        self._months = MONTH_INDEXES
        self._years: tuple[int, ...] = ()

        self._recompute(plan_recompute(InvalidationLevel.ALL, initial_date, initial_date))
        logger.debug(f"Calendar cursor '{name}' initialized with date: {self._date}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> CalendarConfig:
        return self._config

    @property
    def date(self) -> datetime:
        """Get the cursor's current date."""
        return self._date

    @property
    def day(self) -> int:
        """Get the day of month (1-based)."""
        return self._day

    @property
    def week_of_month(self) -> int:
        """Get the zero-based week of month relative to the configured week start."""
        return self._week_of_month

    @property
    def month(self) -> int:
        """Get the zero-based month."""
        return self._month

    @property
    def year(self) -> int:
        return self._year

    @property
    def days(self) -> tuple[int, ...]:
        return self._days

    @property
    def weeks(self) -> tuple[int, ...]:
        return self._weeks

    @property
    def months(self) -> tuple[int, ...]:
        return self._months

    @property
    def years(self) -> tuple[int, ...]:
        return self._years

    # Mutators

    def set_date(self, value: datetime) -> datetime:
        """Replace the date outright and re-derive every field.

        Args:
            value: New cursor date

        Returns:
            New cursor date
        """
        return self._move(value, InvalidationLevel.ALL)

    def set_day(self, day_of_month: int) -> datetime:
        """Move to ``day_of_month`` within the current month.

        Out-of-range days overflow into the adjacent month.
        """
        return self._move(dates.set_day_of_month(self._date, day_of_month), InvalidationLevel.DAY)

    def set_week(self, week_index: int) -> datetime:
        """Move by whole weeks so the date lands in week ``week_index``.

        The shift keeps the weekday and may leave the current month.
        """
        days_diff = (week_index - self._week_of_month) * 7
        return self._move(dates.add_days(self._date, days_diff), InvalidationLevel.WEEK)

    def set_month(self, month_index: int) -> datetime:
        """Move to the same day in zero-based ``month_index`` of the current year."""
        return self._move(dates.set_month(self._date, month_index), InvalidationLevel.MONTH)

    def set_year(self, year: int) -> datetime:
        """Move to the same month and day in ``year``."""
        return self._move(dates.set_year(self._date, year), InvalidationLevel.YEAR)

    def shift_by_days(self, days: int) -> datetime:
        return self._move(dates.add_days(self._date, days), InvalidationLevel.ALL)

    def shift_by_weeks(self, weeks: int) -> datetime:
        return self._move(dates.add_days(self._date, weeks * 7), InvalidationLevel.ALL)

    def shift_by_months(self, months: int) -> datetime:
        return self._move(dates.add_months(self._date, months), InvalidationLevel.ALL)

    def shift_by_years(self, years: int) -> datetime:
        return self._move(dates.add_years(self._date, years), InvalidationLevel.ALL)

    # Ranges

    def get_week_range(self) -> tuple[datetime, datetime]:
        """Get the first and last instant of the week containing the date."""
        week_start = self._config.week_start
        return (
            dates.start_of_week(self._date, week_start),
            dates.end_of_week(self._date, week_start),
        )

    def get_month_range(self) -> tuple[datetime, datetime]:
        return dates.start_of_month(self._date), dates.end_of_month(self._date)

    def get_year_range(self) -> tuple[datetime, datetime]:
        return dates.start_of_year(self._date), dates.end_of_year(self._date)

    def get_trailing_twelve_months_range(self) -> tuple[datetime, datetime]:
        """Get the range from the first day of the month 11 months back to the date.

        The start keeps the date's time of day.
        """
        start = dates.set_day_of_month(dates.sub_months(self._date, 11), 1)
        return start, self._date

    # Names

    def month_name(self, month_index: int) -> str:
        return MONTHS[month_index % 12]

    def weekday_name(self, day_of_month: int) -> str:
        """Get the weekday abbreviation of ``day_of_month`` in the cursor's month."""
        target = dates.set_day_of_month(self._date, day_of_month)
        return WEEKDAYS[dates.day_of_week(target)]

    # Enumerations computed fresh from the current date

    def get_days(self) -> tuple[int, ...]:
        return tuple(range(1, dates.days_in_month(self._date) + 1))

    def get_weeks(self) -> tuple[int, ...]:
        return tuple(range(dates.weeks_in_month(self._date, self._config.week_start)))

    def get_months(self) -> tuple[int, ...]:
        return MONTH_INDEXES

    def get_years(self) -> tuple[int, ...]:
        """Get ``year_window_size`` consecutive years ending at the date's year."""
        last = self._date.year
        return tuple(range(last - self._config.year_window_size + 1, last + 1))

    def snapshot(self) -> dict[str, Any]:
        """Get every scalar and enumeration field as a plain dictionary."""
        return {
            "date": self._date.isoformat(),
            "day": self._day,
            "week_of_month": self._week_of_month,
            "month": self._month,
            "month_name": self.month_name(self._month),
            "year": self._year,
            "days": list(self._days),
            "weeks": list(self._weeks),
            "months": list(self._months),
            "years": list(self._years),
        }

    # Internals

    def _move(self, value: datetime, level: InvalidationLevel) -> datetime:
        old_date = self._date
        self._date = value
        plan = plan_recompute(level, old_date, value, self._config.escalate_month_crossings)
        self._recompute(plan)

        logger.debug(
            f"Cursor '{self._name}' {level.value} update: {old_date} -> {self._date} "
            f"(recomputed at {plan.level.value} level)"
        )
        return self._date

    def _recompute(self, plan: RecomputePlan) -> None:
        self._day = self._date.day
        self._week_of_month = dates.week_of_month(self._date, self._config.week_start)

        if plan.month_fields:
            self._days = self.get_days()
            self._weeks = self.get_weeks()
            self._month = self._date.month - 1
            self._year = self._date.year

        if plan.years is YearsRefresh.ALWAYS or not self._years_cover(self._date.year):
            self._years = self.get_years()
            logger.verbose(  # type: ignore[attr-defined]
                f"Cursor '{self._name}' years window rebuilt: {self._years}"
            )

    def _years_cover(self, year: int) -> bool:
        """Check whether the cached years window contains ``year``."""
        return bool(self._years) and self._years[0] <= year <= self._years[-1]

    def __str__(self) -> str:
        return f"CalendarCursor({self._name}={self._date})"

    def __repr__(self) -> str:
        return (
            f"CalendarCursor(name={self._name!r}, date={self._date!r}, "
            f"day={self._day}, month={self._month}, year={self._year})"
        )
