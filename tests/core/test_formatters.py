"""
Tests for Bubble Engine formatters.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from bubble_engine.core.formatters import (
    format_datetime,
    format_duration,
    get_utc_timestamp,
    hours_between,
    parse_datetime,
    to_local_naive,
)


class TestFormatDuration:
    """Test format_duration."""

    def test_zero_and_negative(self):
        assert format_duration(0) == "0s"
        assert format_duration(-5) == "0s"

    def test_seconds(self):
        assert format_duration(42) == "42s"

    def test_minutes_only(self):
        assert format_duration(45 * 60) == "45m"

    def test_days_hours_minutes(self):
        assert format_duration(86400 + 3600 + 1800) == "1d 1h 30m"

    def test_whole_hours_omit_minutes(self):
        assert format_duration(7200) == "2h"


class TestParseDatetime:
    """Test parse_datetime."""

    def test_naive_iso(self):
        assert parse_datetime("2026-03-04T10:00:00") == datetime(2026, 3, 4, 10, 0)

    def test_z_suffix_is_utc(self):
        parsed = parse_datetime("2026-03-04T10:00:00Z")
        assert parsed == datetime(2026, 3, 4, 10, 0, tzinfo=timezone.utc)

    def test_invalid_returns_none(self):
        assert parse_datetime("tomorrow") is None
        assert parse_datetime("") is None


class TestTimeHelpers:
    """Test format_datetime, hours_between and timestamps."""

    def test_format_datetime_drops_microseconds(self):
        assert format_datetime(datetime(2026, 3, 4, 10, 0, 0, 123456)) == "2026-03-04T10:00:00"

    def test_hours_between(self):
        start = datetime(2026, 3, 4, 10, 0)
        assert hours_between(start, start + timedelta(minutes=90)) == 1.5
        assert hours_between(start, start - timedelta(hours=2)) == -2.0

    def test_utc_timestamp_format(self):
        stamp = get_utc_timestamp()
        assert stamp.endswith("Z")
        assert datetime.strptime(stamp, "%Y-%m-%dT%H:%M:%SZ")


class TestToLocalNaive:
    """Test to_local_naive."""

    def test_naive_unchanged(self):
        moment = datetime(2026, 3, 4, 10, 0)
        assert to_local_naive(moment) is moment

    def test_aware_converted_to_local(self):
        aware = datetime(2026, 3, 4, 12, 0, tzinfo=timezone.utc)
        converted = to_local_naive(aware)

        assert converted.tzinfo is None
        assert converted == aware.astimezone().replace(tzinfo=None)

    def test_offsets_compare_after_conversion(self):
        """The same instant in two offsets converts to the same local time."""
        utc = datetime(2026, 3, 4, 12, 0, tzinfo=timezone.utc)
        plus_two = datetime(2026, 3, 4, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_local_naive(utc) == to_local_naive(plus_two)
