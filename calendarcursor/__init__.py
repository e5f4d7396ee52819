"""Calendar Cursor - dual date cursor state for calendar and range pickers.

Tracks a primary and an optional secondary date cursor, each exposing its day,
week of month, month and year plus the day, week, month and year enumerations
used to populate selection widgets.
"""

__version__ = "1.0.0"
__author__ = "CalendarCursor Team"
__description__ = "Dual date cursor state engine for calendar pickers"

from .config.models import CalendarConfig  # noqa: E402
from .cursor import CalendarCursor  # noqa: E402
from .exceptions import CalendarCursorError, ConfigurationError  # noqa: E402
from .invalidation import InvalidationLevel  # noqa: E402
from .state import PRIMARY, SECONDARY, CursorSelector, DualCalendarState  # noqa: E402
from .utils.dates import WeekStart  # noqa: E402

__all__ = [
    "PRIMARY",
    "SECONDARY",
    "CalendarConfig",
    "CalendarCursor",
    "CalendarCursorError",
    "ConfigurationError",
    "CursorSelector",
    "DualCalendarState",
    "InvalidationLevel",
    "WeekStart",
    "__author__",
    "__description__",
    "__version__",
]
