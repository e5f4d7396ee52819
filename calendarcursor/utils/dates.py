"""Calendar arithmetic primitives used by the cursor engine.

Every function is pure and total over valid calendar ranges: it takes a
``datetime`` (and, where relevant, a week-start day) and returns either a new
``datetime`` or an integer.

Normalization rules:
    - ``set_day_of_month`` overflows forward (day 31 of a 30-day month lands on
      the 1st of the next month, day 0 on the last day of the previous month).
    - ``set_month``, ``set_year``, ``add_months`` and ``add_years`` clamp the
      day to the length of the target month.
"""

import calendar
from datetime import datetime, time, timedelta
from enum import IntEnum

from dateutil.relativedelta import relativedelta


class WeekStart(IntEnum):
    """First day of the week, numbered like ``day_of_week`` (Sunday = 0)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def add_months(value: datetime, months: int) -> datetime:
    return value + relativedelta(months=months)


def add_years(value: datetime, years: int) -> datetime:
    return value + relativedelta(years=years)


def sub_months(value: datetime, months: int) -> datetime:
    return add_months(value, -months)


def set_day_of_month(value: datetime, day: int) -> datetime:
    """Move to ``day`` of the current month, overflowing into adjacent months."""
    return value.replace(day=1) + timedelta(days=day - 1)


def set_month(value: datetime, month: int) -> datetime:
    """Move to zero-based ``month`` of the current year.

    Months outside 0..11 carry into the year. The day is clamped to the
    length of the target month.
    """
    carry, month_index = divmod(month, 12)
    return _replace_clamped(value, value.year + carry, month_index + 1)


def set_year(value: datetime, year: int) -> datetime:
    """Move to the same month and day in ``year``.

    Raises:
        ValueError: If ``year`` is outside 1..9999
    """
    return _replace_clamped(value, year, value.month)


def _replace_clamped(value: datetime, year: int, month: int) -> datetime:
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def day_of_week(value: datetime) -> int:
    """Return the day of the week with Sunday = 0 and Saturday = 6."""
    return (value.weekday() + 1) % 7


def days_in_month(value: datetime) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def start_of_week(value: datetime, week_start: WeekStart = WeekStart.MONDAY) -> datetime:
    offset = (day_of_week(value) - int(week_start)) % 7
    return start_of_day(value - timedelta(days=offset))


def end_of_week(value: datetime, week_start: WeekStart = WeekStart.MONDAY) -> datetime:
    return end_of_day(start_of_week(value, week_start) + timedelta(days=6))


def start_of_month(value: datetime) -> datetime:
    return start_of_day(value.replace(day=1))


def end_of_month(value: datetime) -> datetime:
    return end_of_day(value.replace(day=days_in_month(value)))


def start_of_year(value: datetime) -> datetime:
    return start_of_day(value.replace(month=1, day=1))


def end_of_year(value: datetime) -> datetime:
    return end_of_day(value.replace(month=12, day=31))


def _first_week_offset(value: datetime, week_start: WeekStart) -> int:
    # Number of days of the first calendar week that belong to the previous month
    return (day_of_week(value.replace(day=1)) - int(week_start)) % 7


def week_of_month(value: datetime, week_start: WeekStart = WeekStart.MONDAY) -> int:
    """Return the zero-based index of the calendar week containing ``value``."""
    return (value.day - 1 + _first_week_offset(value, week_start)) // 7


def weeks_in_month(value: datetime, week_start: WeekStart = WeekStart.MONDAY) -> int:
    """Return the number of calendar weeks the month of ``value`` spans."""
    return (days_in_month(value) - 1 + _first_week_offset(value, week_start)) // 7 + 1
