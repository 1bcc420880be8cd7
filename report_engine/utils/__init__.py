"""
Utilities module for the report engine.
Contains common utility functions and helpers.
"""

from .logger import get_logger
from .date_utils import (
    get_current_timestamp,
    format_datetime,
    parse_datetime,
    format_date,
    days_between,
)

__all__ = [
    "get_logger",
    "get_current_timestamp",
    "format_datetime",
    "parse_datetime",
    "format_date",
    "days_between",
]
