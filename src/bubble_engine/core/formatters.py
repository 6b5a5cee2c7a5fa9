"""
Bubble Engine Formatters

Utility functions for formatting times and durations for display and CLI output.
"""

from datetime import datetime, timezone
from typing import Optional

# =============================================================================
# Duration Formatting
# =============================================================================


def format_duration(seconds: float) -> str:
    """
    Format seconds into human-readable duration.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1d 2h 30m", "2h 15m", "45m", "12s"

    Examples:
        >>> format_duration(86400 + 3600 + 1800)
        '1d 1h 30m'
        >>> format_duration(42)
        '42s'
    """
    if seconds <= 0:
        return "0s"

    if seconds < 60:
        return f"{int(seconds)}s"

    days = int(seconds // 86400)
    hours = int((seconds % 86400) // 3600)
    minutes = int((seconds % 3600) // 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0 or not parts:
        parts.append(f"{minutes}m")

    return " ".join(parts)


# =============================================================================
# DateTime Parsing and Formatting
# =============================================================================


def parse_datetime(dt_str: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 datetime string.

    Accepts a trailing "Z" for UTC. Naive strings stay naive so callers keep
    whatever clock convention they use.

    Args:
        dt_str: ISO format datetime string

    Returns:
        datetime object, or None if parsing fails
    """
    if not dt_str:
        return None

    value = dt_str.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_datetime(dt: datetime) -> str:
    """
    Format datetime for display.

    Args:
        dt: datetime object

    Returns:
        ISO format string without microseconds
    """
    return dt.replace(microsecond=0).isoformat()


def get_utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def get_utc_timestamp() -> str:
    """
    Get current UTC timestamp string.

    Returns:
        ISO format timestamp like "2026-01-15T12:30:00Z"
    """
    return get_utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


def to_local_naive(dt: datetime) -> datetime:
    """
    Convert a timezone-aware datetime to naive local time.

    The engine clock defaults to ``datetime.now`` so every datetime it compares
    must be naive local time. Naive values pass through unchanged.

    Args:
        dt: Naive or aware datetime

    Returns:
        Naive datetime in the local timezone
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def hours_between(start: datetime, end: datetime) -> float:
    """
    Hours from start to end (negative if end is earlier).

    Args:
        start: Reference time
        end: Target time

    Returns:
        Fractional hours
    """
    return (end - start).total_seconds() / 3600

