"""
Tests for relative time rendering.

Verifies timestamp parsing, unit selection, pluralization and the
unknown-time fallback used by the footer.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from earlystart_app.utils.time import (
    UNKNOWN_TIME,
    format_time_ago,
    parse_iso_timestamp,
    utc_now,
)

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _iso_before(delta: timedelta) -> str:
    return (NOW - delta).isoformat().replace("+00:00", "Z")


class TestParseIsoTimestamp:
    """Test parse_iso_timestamp function."""

    def test_parses_trailing_z(self):
        assert parse_iso_timestamp("2025-03-01T10:05:00Z") == datetime(
            2025, 3, 1, 10, 5, tzinfo=timezone.utc
        )

    def test_converts_offsets_to_utc(self):
        parsed = parse_iso_timestamp("2025-03-01T12:00:00+02:00")
        assert parsed == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_naive_value_is_treated_as_utc(self):
        assert parse_iso_timestamp("2025-03-01T10:00:00") == datetime(
            2025, 3, 1, 10, 0, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2025-13-45T99:00:00Z"])
    def test_missing_or_invalid_returns_none(self, value):
        assert parse_iso_timestamp(value) is None


class TestFormatTimeAgo:
    """Test format_time_ago function."""

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=0), "0 seconds ago"),
        (timedelta(seconds=1), "1 second ago"),
        (timedelta(seconds=45), "45 seconds ago"),
        (timedelta(seconds=90), "1 minute ago"),
        (timedelta(minutes=59, seconds=59), "59 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=3, minutes=20), "3 hours ago"),
        (timedelta(hours=25), "1 day ago"),
        (timedelta(days=12), "12 days ago"),
    ])
    def test_largest_whole_unit(self, delta, expected):
        assert format_time_ago(_iso_before(delta), now=NOW) == expected

    @pytest.mark.parametrize("value", [None, "", "not a timestamp"])
    def test_unknown_time(self, value):
        assert format_time_ago(value, now=NOW) == UNKNOWN_TIME

    def test_future_timestamp_clamps_to_zero(self):
        future = (NOW + timedelta(minutes=5)).isoformat()

        assert format_time_ago(future, now=NOW) == "0 seconds ago"

    def test_defaults_to_wall_clock(self):
        with patch("earlystart_app.utils.time.utc_now", return_value=NOW):
            assert format_time_ago(_iso_before(timedelta(hours=2))) == "2 hours ago"


class TestUtcNow:
    """Test utc_now function."""

    def test_returns_aware_utc(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc
