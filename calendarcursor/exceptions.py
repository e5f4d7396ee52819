"""
Exceptions for calendarcursor configuration handling.

The cursor engine itself never raises: out-of-range dates are normalized by
the date arithmetic layer. These exceptions cover invalid configuration values
supplied through settings, reconfiguration, or the command line.
"""

from typing import Any, Optional


class CalendarCursorError(Exception):
    """Base exception for all calendarcursor errors."""


class ConfigurationError(CalendarCursorError):
    """Raised when a calendar configuration value is rejected.

    Args:
        message: Human-readable error description
        field_name: ``CalendarConfig`` field that was rejected
        field_value: The rejected value
        validation_errors: Messages reported by validation

    Example:
        >>> str(ConfigurationError("Invalid calendar configuration",
        ...                        field_name="year_window_size", field_value=0))
        'Invalid calendar configuration: year_window_size=0'
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
    ) -> None:
        self.message = message
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message
        if self.field_name:
            text += f": {self.field_name}={self.field_value!r}"
        if self.validation_errors:
            text += f" ({'; '.join(self.validation_errors)})"
        return text
