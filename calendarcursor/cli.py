"""Command-line interface for inspecting calendar cursor state.

Builds a ``DualCalendarState`` from settings and arguments, applies the
requested mutations to the selected cursor, and prints a snapshot of both
cursors as JSON or YAML.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from . import __version__
from .config.models import parse_week_start
from .config.settings import CalendarCursorSettings
from .exceptions import CalendarCursorError
from .state import CursorSelector, DualCalendarState
from .utils.dates import WeekStart
from .utils.logging import apply_command_line_overrides, setup_logging_from_settings

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_datetime(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime string for command-line arguments.

    Args:
        value (str): Date string such as ``2024-01-15`` or ``2024-01-15T09:30``

    Returns:
        datetime: Parsed datetime, midnight when no time is given

    Raises:
        argparse.ArgumentTypeError: If the value is not an ISO 8601 date

    Example:
        >>> parse_datetime("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0)
    """
    try:
        return datetime.fromisoformat(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: {value}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM"
        ) from err


def parse_week_start_arg(value: str) -> WeekStart:
    """Parse a weekday name or number into ``WeekStart``.

    Raises:
        argparse.ArgumentTypeError: If the value names no weekday
    """
    parsed = parse_week_start(value)
    try:
        return WeekStart(parsed)
    except ValueError as err:
        choices = ", ".join(member.name.lower() for member in WeekStart)
        raise argparse.ArgumentTypeError(
            f"Invalid week start '{value}'. Use one of: {choices} or 0-6"
        ) from err


def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["--date", "2024-06-15", "--shift-years", "1"])
        >>> args.shift_years
        1
    """
    parser = argparse.ArgumentParser(
        prog="calendarcursor",
        description="Calendar cursor state - inspect primary/secondary date cursors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Snapshot of a cursor at the current moment
  %(prog)s --date 2024-01-31 --month 1       # Move January 31st to February
  %(prog)s --date 2024-06-15 --shift-years 1 # Shift one year forward
  %(prog)s --secondary 2024-12-01 --cursor secondary --shift-weeks -2
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show version information"
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to a YAML configuration file"
    )

    dates_group = parser.add_argument_group("dates", "Cursor dates")
    dates_group.add_argument(
        "--date", type=parse_datetime, default=None, help="Primary cursor date (default: now)"
    )
    dates_group.add_argument(
        "--secondary", type=parse_datetime, default=None, help="Secondary cursor date"
    )

    config_group = parser.add_argument_group("calendar", "Calendar configuration")
    config_group.add_argument(
        "--week-start",
        type=parse_week_start_arg,
        default=None,
        help="First day of the week, name or 0=Sunday..6=Saturday",
    )
    config_group.add_argument(
        "--years", type=int, default=None, help="Number of years in the years window"
    )

    ops_group = parser.add_argument_group(
        "operations", "Mutations applied to the selected cursor, set operations first"
    )
    ops_group.add_argument(
        "--cursor",
        choices=[selector.value for selector in CursorSelector],
        default=CursorSelector.PRIMARY.value,
        help="Cursor the operations apply to (default: primary)",
    )
    ops_group.add_argument("--day", type=int, default=None, help="Set the day of month")
    ops_group.add_argument("--week", type=int, default=None, help="Set the zero-based week of month")
    ops_group.add_argument("--month", type=int, default=None, help="Set the zero-based month")
    ops_group.add_argument("--year", type=int, default=None, help="Set the year")
    ops_group.add_argument("--shift-days", type=int, default=0, help="Shift by N days")
    ops_group.add_argument("--shift-weeks", type=int, default=0, help="Shift by N weeks")
    ops_group.add_argument("--shift-months", type=int, default=0, help="Shift by N months")
    ops_group.add_argument("--shift-years", type=int, default=0, help="Shift by N years")

    output_group = parser.add_argument_group("output", "Output and logging options")
    output_group.add_argument(
        "--format", choices=["json", "yaml"], default="json", help="Snapshot output format"
    )
    output_group.add_argument(
        "--log-level", choices=LOG_LEVELS, default=None, help="Set the console log level"
    )
    output_group.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose console logging"
    )
    output_group.add_argument(
        "--log-dir", type=Path, default=None, help="Write a log file to this directory"
    )
    output_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console logging"
    )

    return parser


def build_settings(args: argparse.Namespace) -> CalendarCursorSettings:
    """Create settings with command-line overrides applied."""
    overrides: dict[str, Any] = {}
    if args.config is not None:
        overrides["config_path"] = args.config
    if args.week_start is not None:
        overrides["week_start"] = int(args.week_start)
    if args.years is not None:
        overrides["year_window_size"] = args.years
    return CalendarCursorSettings(**overrides)


def apply_operations(state: DualCalendarState, args: argparse.Namespace) -> None:
    """Apply set and shift operations from ``args`` to the selected cursor."""
    selector = CursorSelector(args.cursor)

    if args.year is not None:
        state.set_year(args.year, selector)
    if args.month is not None:
        state.set_month(args.month, selector)
    if args.week is not None:
        state.set_week(args.week, selector)
    if args.day is not None:
        state.set_day(args.day, selector)

    if args.shift_years:
        state.shift_by_years(args.shift_years, selector)
    if args.shift_months:
        state.shift_by_months(args.shift_months, selector)
    if args.shift_weeks:
        state.shift_by_weeks(args.shift_weeks, selector)
    if args.shift_days:
        state.shift_by_days(args.shift_days, selector)


def format_snapshot(snapshot: dict[str, Any], output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(snapshot, sort_keys=False, allow_unicode=True)
    return json.dumps(snapshot, indent=2, ensure_ascii=False)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the command line interface.

    Args:
        argv: Argument list, defaults to ``sys.argv[1:]``

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = build_settings(args)
        setup_logging_from_settings(apply_command_line_overrides(settings, args))
        state = DualCalendarState.from_settings(settings, args.date, args.secondary)
    except CalendarCursorError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        apply_operations(state, args)
    except (ValueError, OverflowError) as e:
        # Dates outside years 1..9999 cannot be represented
        logger.debug(f"Operation failed on {state}: {e}")
        print(f"Date out of range: {e}", file=sys.stderr)
        return 2

    logger.info(f"Final state: {state}")

    print(format_snapshot(state.snapshot(), args.format))
    return 0
