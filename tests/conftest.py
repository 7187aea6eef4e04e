"""Pytest configuration and shared fixtures."""

import pytest

from mstime import clock
from mstime.clock import FixedClock, OffsetCache
from mstime.timestamp import Timestamp

# 2022-01-01T00:00:00Z
NEW_YEAR_2022_SECONDS = 1640995200


@pytest.fixture
def pin_offset(monkeypatch):
    """Replace the process-wide offset snapshot with a private pinned one."""
    def _pin(seconds: int) -> OffsetCache:
        cache = OffsetCache()
        cache.pin(seconds)
        monkeypatch.setattr(clock, "offset_cache", cache)
        return cache

    return _pin


@pytest.fixture
def fresh_offset_cache(monkeypatch) -> OffsetCache:
    """An uninitialized offset cache installed as the process-wide one."""
    cache = OffsetCache()
    monkeypatch.setattr(clock, "offset_cache", cache)
    return cache


@pytest.fixture
def new_year_clock() -> FixedClock:
    """Clock frozen at 2022-01-01T00:00:00.123456789Z."""
    return FixedClock(NEW_YEAR_2022_SECONDS, 123_456_789)


@pytest.fixture
def afternoon() -> Timestamp:
    """2022-01-01 15:30:45.123 local time."""
    return Timestamp.from_calendar(2022, 1, 1, 15, 30, 45, 123)
