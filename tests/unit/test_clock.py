"""Tests for the injectable clock."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.core.clock import FixedClock, resolve_now


TOKYO = timezone(timedelta(hours=9))


@pytest.mark.unit
class TestResolveNow:
    """Tests for resolve_now."""

    def test_none_uses_system_clock(self):
        """Test that None falls back to the current UTC time."""
        before = datetime.now(UTC)
        resolved = resolve_now(None)

        assert resolved.tzinfo is UTC
        assert resolved >= before

    def test_naive_is_taken_as_utc(self):
        """Test that a naive datetime is read as UTC wall time."""
        assert resolve_now(datetime(2026, 1, 15, 12, 0)) == datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def test_offset_is_converted_to_utc(self):
        """Test that an aware datetime in another offset is converted to UTC."""
        resolved = resolve_now(datetime(2026, 1, 16, 8, 0, tzinfo=TOKYO))

        assert resolved.tzinfo is UTC
        assert resolved == datetime(2026, 1, 15, 23, 0, tzinfo=UTC)
        assert resolved.date().isoformat() == "2026-01-15"


@pytest.mark.unit
def test_fixed_clock_returns_utc_instant():
    """Test that FixedClock always returns the same instant in UTC."""
    clock = FixedClock(datetime(2026, 1, 16, 8, 0, tzinfo=TOKYO))

    assert clock() == clock()
    assert clock().tzinfo is UTC
    assert clock().hour == 23
