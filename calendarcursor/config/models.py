"""
Calendar configuration model shared by the primary and secondary cursors.

The model uses Pydantic for validation. Assignments are validated too, so
``DualCalendarState.reconfigure`` cannot leave the shared configuration in an
invalid state.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import WeekStart


def parse_week_start(value: Any) -> Any:
    """Convert a weekday name ("monday", "Sun", ...) to ``WeekStart``.

    Non-string values are returned unchanged for Pydantic to validate.

    Args:
        value: Weekday name, ``WeekStart`` member or integer

    Returns:
        Matching ``WeekStart`` for recognized names, otherwise ``value``
    """
    if not isinstance(value, str):
        return value

    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    for member in WeekStart:
        if member.name == name or member.name[:3] == name:
            return member
    return value


class CalendarConfig(BaseModel):
    """Configuration shared by both cursors of a ``DualCalendarState``.

    Attributes:
        week_start: First day of the week used for week-of-month computations
        year_window_size: Number of years exposed in the years enumeration
        escalate_month_crossings: Treat day/week mutations that leave the
            month as month-level invalidations

    Example:
        >>> config = CalendarConfig(week_start="sunday", year_window_size=5)
        >>> config.week_start
        <WeekStart.SUNDAY: 0>
    """

    model_config = ConfigDict(validate_assignment=True)

    week_start: WeekStart = Field(
        default=WeekStart.MONDAY, description="First day of the week"
    )
    year_window_size: int = Field(
        default=9, ge=1, description="Number of years in the years window"
    )
    escalate_month_crossings: bool = Field(
        default=False,
        description="Rebuild month-level fields when a day/week change leaves the month",
    )

    @field_validator("week_start", mode="before")
    @classmethod
    def validate_week_start(cls, v: Any) -> Any:
        """Accept weekday names in addition to integers."""
        return parse_week_start(v)
