"""Calendar configuration model and application settings."""

from .models import CalendarConfig
from .settings import CalendarCursorSettings, LoggingSettings, get_settings, reset_settings

__all__ = [
    "CalendarConfig",
    "CalendarCursorSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
]
