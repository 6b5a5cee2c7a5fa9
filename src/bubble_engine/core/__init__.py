"""
Bubble Engine Core

Shared infrastructure: settings, logging, constants and formatters.
"""

from .config import BubbleSettings, get_settings, reset_settings
from .formatters import (
    format_datetime,
    format_duration,
    get_utc_now,
    get_utc_timestamp,
    hours_between,
    parse_datetime,
    to_local_naive,
)
from .logging import get_logger, reset_logging, set_log_level

__all__ = [
    # Config
    "BubbleSettings",
    "get_settings",
    "reset_settings",
    # Logging
    "get_logger",
    "reset_logging",
    "set_log_level",
    # Formatters
    "format_datetime",
    "format_duration",
    "get_utc_now",
    "get_utc_timestamp",
    "hours_between",
    "parse_datetime",
    "to_local_naive",
]
