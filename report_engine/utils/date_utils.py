"""
Date and time utilities for report generation.
Provides timestamp creation, parsing of upstream date values and formatting.
"""

from datetime import datetime, date
from typing import Any, Optional
from dateutil import parser
import pytz

from report_engine.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "UTC"


def get_current_timestamp(timezone_name: Optional[str] = None) -> datetime:
    """
    Get current timestamp with optional timezone.

    Args:
        timezone_name: Timezone name (e.g., 'UTC', 'Asia/Jakarta')

    Returns:
        Current timezone-aware datetime
    """
    try:
        if timezone_name:
            return datetime.now(pytz.timezone(timezone_name))
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone '{timezone_name}', falling back to UTC")
    return datetime.now(pytz.UTC)


def format_datetime(dt: Optional[datetime], format_string: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format datetime to string.

    Args:
        dt: Datetime object to format
        format_string: Format string

    Returns:
        Formatted datetime string, empty when dt is None
    """
    if dt is None:
        return ""
    return dt.strftime(format_string)


def parse_datetime(value: Any, timezone_name: Optional[str] = None) -> Optional[datetime]:
    """
    Parse an upstream date value into a timezone-aware datetime.

    Accepts datetime and date objects as well as strings in any format
    understood by dateutil. Returns None for empty or unparseable input.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            dt = parser.parse(value.strip())
        except (ValueError, OverflowError, parser.ParserError):
            logger.debug(f"Could not parse date value: {value!r}")
            return None
    else:
        return None

    return _apply_timezone(dt, timezone_name)


def _apply_timezone(dt: datetime, timezone_name: Optional[str]) -> datetime:
    """Apply timezone to naive datetime object."""
    if dt.tzinfo is not None:
        return dt
    if timezone_name:
        return pytz.timezone(timezone_name).localize(dt)
    return pytz.UTC.localize(dt)


def format_date(value: Any, format_string: str = "%d-%m-%Y", default: str = "-") -> str:
    """Parse and format an upstream date value, returning default when absent."""
    dt = parse_datetime(value)
    if dt is None:
        return default
    return dt.strftime(format_string)


def days_between(start: Any, end: Any = None, reference: Optional[datetime] = None) -> Optional[int]:
    """
    Whole days elapsed between start and end.

    When end is absent the reference time (default: now, UTC) is used.
    Returns None when start cannot be parsed.
    """
    start_dt = parse_datetime(start)
    if start_dt is None:
        return None

    end_dt = parse_datetime(end)
    if end_dt is None:
        end_dt = parse_datetime(reference) if reference is not None else get_current_timestamp()

    return abs((end_dt - start_dt).days)
