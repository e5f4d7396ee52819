"""Primary/secondary cursor pair sharing one calendar configuration."""

import logging
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from .config.models import CalendarConfig
from .cursor import CalendarCursor
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .config.settings import CalendarCursorSettings

logger = logging.getLogger(__name__)


class CursorSelector(Enum):
    """Selects which cursor an operation applies to."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


PRIMARY = CursorSelector.PRIMARY
SECONDARY = CursorSelector.SECONDARY


class DualCalendarState:
    """Owns a primary cursor, an optional secondary cursor and their shared config.

    The primary cursor always exists. The secondary cursor is ``None`` until it
    is supplied at construction, created by ``reset(init_secondary=True)``, or
    created on first use by any mutator that selects it.

    Example:
        >>> state = DualCalendarState(datetime(2024, 6, 15))
        >>> state.primary.years[0], state.primary.years[-1]
        (2016, 2024)
        >>> state.shift_by_years(1)
        datetime.datetime(2025, 6, 15, 0, 0)
        >>> state.has_secondary
        False
    """

    def __init__(
        self,
        primary_date: datetime,
        secondary_date: Optional[datetime] = None,
        config: Optional[CalendarConfig] = None,
    ):
        """Initialize the state and fully derive the supplied cursors.

        Args:
            primary_date: Date of the primary cursor
            secondary_date: Optional date of the secondary cursor
            config: Shared configuration, defaults to ``CalendarConfig()``
        """
        self._config = config if config is not None else CalendarConfig()
        self._primary = CalendarCursor(primary_date, self._config, PRIMARY.value)
        self._secondary: Optional[CalendarCursor] = None
        if secondary_date is not None:
            self._secondary = CalendarCursor(secondary_date, self._config, SECONDARY.value)

        logger.debug(f"Dual calendar state initialized: {self}")

    @classmethod
    def from_settings(
        cls,
        settings: "CalendarCursorSettings",
        primary_date: Optional[datetime] = None,
        secondary_date: Optional[datetime] = None,
    ) -> "DualCalendarState":
        """Build a state from application settings.

        Args:
            settings: Application settings providing the calendar configuration
            primary_date: Primary cursor date, defaults to now
            secondary_date: Optional secondary cursor date

        Returns:
            New state using ``settings.to_calendar_config()``
        """
        return cls(primary_date or datetime.now(), secondary_date, settings.to_calendar_config())

    @property
    def config(self) -> CalendarConfig:
        return self._config

    @property
    def primary(self) -> CalendarCursor:
        return self._primary

    @property
    def secondary(self) -> Optional[CalendarCursor]:
        return self._secondary

    @property
    def has_secondary(self) -> bool:
        return self._secondary is not None

    @property
    def date(self) -> datetime:
        return self._primary.date

    @property
    def secondary_date(self) -> Optional[datetime]:
        return self._secondary.date if self._secondary is not None else None

    def cursor(self, selector: CursorSelector = PRIMARY) -> Optional[CalendarCursor]:
        """Get the selected cursor, ``None`` for an absent secondary cursor."""
        if selector is SECONDARY:
            return self._secondary
        return self._primary

    # Routed mutators

    def set_date(self, value: datetime, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector, value).set_date(value)

    def set_day(self, day_of_month: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).set_day(day_of_month)

    def set_week(self, week_index: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).set_week(week_index)

    def set_month(self, month_index: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).set_month(month_index)

    def set_year(self, year: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).set_year(year)

    def shift_by_days(self, days: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).shift_by_days(days)

    def shift_by_weeks(self, weeks: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).shift_by_weeks(weeks)

    def shift_by_months(self, months: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).shift_by_months(months)

    def shift_by_years(self, years: int, selector: CursorSelector = PRIMARY) -> datetime:
        return self._target(selector).shift_by_years(years)

    # Routed queries

    def get_week_range(self, selector: CursorSelector = PRIMARY) -> tuple[datetime, datetime]:
        return self._target(selector).get_week_range()

    def get_month_range(self, selector: CursorSelector = PRIMARY) -> tuple[datetime, datetime]:
        return self._target(selector).get_month_range()

    def get_year_range(self, selector: CursorSelector = PRIMARY) -> tuple[datetime, datetime]:
        return self._target(selector).get_year_range()

    def get_trailing_twelve_months_range(
        self, selector: CursorSelector = PRIMARY
    ) -> tuple[datetime, datetime]:
        return self._target(selector).get_trailing_twelve_months_range()

    def month_name(self, month_index: int) -> str:
        return self._primary.month_name(month_index)

    def weekday_name(self, day_of_month: int, selector: CursorSelector = PRIMARY) -> str:
        return self._target(selector).weekday_name(day_of_month)

    def derive_period_range(self) -> tuple[datetime, Optional[datetime]]:
        """Get ``(primary date, secondary date)`` as a literal pair.

        No ordering is enforced between the two dates.
        """
        return self._primary.date, self.secondary_date

    # Lifecycle

    def reset(self, init_secondary: bool = False) -> None:
        """Reset the primary cursor, and the secondary when present or requested, to now.

        Args:
            init_secondary: Create the secondary cursor if it does not exist
        """
        now = datetime.now()
        self._primary.set_date(now)
        if self._secondary is not None or init_secondary:
            self._ensure_secondary(now).set_date(now)

        logger.debug(f"Dual calendar state reset: {self}")

    def clone(self) -> "DualCalendarState":
        """Create an independent state with the same dates and configuration reference."""
        return DualCalendarState(self._primary.date, self.secondary_date, self._config)

    def reconfigure(self, **changes: Any) -> CalendarConfig:
        """Update the shared configuration in place.

        Cached fields are not re-derived; call ``set_date`` or ``reset`` to
        apply the new configuration to them.

        Args:
            **changes: ``CalendarConfig`` field values to assign

        Returns:
            The shared configuration

        Raises:
            ConfigurationError: If a field is unknown or a value is invalid.
                The shared configuration is left unchanged.
        """
        for field_name, value in changes.items():
            if field_name not in CalendarConfig.model_fields:
                raise ConfigurationError(
                    f"Unknown configuration field: {field_name}",
                    field_name=field_name,
                    field_value=value,
                )

        # Validate the merged result before touching the shared instance
        try:
            updated = CalendarConfig.model_validate({**self._config.model_dump(), **changes})
        except ValidationError as e:
            first_error = e.errors()[0]
            failed_field = str(first_error["loc"][0]) if first_error["loc"] else None
            raise ConfigurationError(
                f"Invalid value for {failed_field}",
                field_name=failed_field,
                field_value=changes.get(failed_field) if failed_field else None,
                validation_errors=[err["msg"] for err in e.errors()],
            ) from e

        for field_name in changes:
            setattr(self._config, field_name, getattr(updated, field_name))

        logger.debug(f"Calendar configuration updated: {self._config!r}")
        return self._config

    def snapshot(self) -> dict[str, Any]:
        """Get both cursors' fields, ``None`` for an absent secondary cursor."""
        return {
            "week_start": self._config.week_start.name.lower(),
            "year_window_size": self._config.year_window_size,
            PRIMARY.value: self._primary.snapshot(),
            SECONDARY.value: self._secondary.snapshot() if self._secondary is not None else None,
        }

    def _target(
        self, selector: CursorSelector, initial_date: Optional[datetime] = None
    ) -> CalendarCursor:
        if selector is SECONDARY:
            return self._ensure_secondary(initial_date)
        return self._primary

    def _ensure_secondary(self, initial_date: Optional[datetime] = None) -> CalendarCursor:
        if self._secondary is None:
            self._secondary = CalendarCursor(
                initial_date or datetime.now(), self._config, SECONDARY.value
            )
            logger.debug(f"Secondary cursor created at {self._secondary.date}")
        return self._secondary

    def __str__(self) -> str:
        return f"DualCalendarState(primary={self._primary.date}, secondary={self.secondary_date})"

    def __repr__(self) -> str:
        return (
            f"DualCalendarState(primary={self._primary!r}, "
            f"secondary={self._secondary!r}, config={self._config!r})"
        )
