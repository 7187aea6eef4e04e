"""
Tests for the Timestamp value type.

Covers construction, day and minute alignment (including pre-epoch
values), session helpers, formatting and value semantics.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from mstime import Timestamp
from mstime.clock import FixedClock
from mstime.config.defaults import SessionParams
from mstime.millis import MILLISECONDS_PER_DAY, MILLISECONDS_PER_HOUR, MILLISECONDS_PER_MINUTE

NEW_YEAR_2022_MS = 1640995200000

_rng = random.Random(20220101)
SAMPLE_VALUES = [0, 1, -1, MILLISECONDS_PER_DAY, -MILLISECONDS_PER_DAY, NEW_YEAR_2022_MS] + [
    _rng.randint(-5_000_000_000_000, 5_000_000_000_000) for _ in range(50)
]


class TestConstruction:
    """Test the ways of building a timestamp."""

    def test_from_millis(self):
        ts = Timestamp.from_millis(NEW_YEAR_2022_MS)
        assert ts.value == NEW_YEAR_2022_MS
        assert int(ts) == NEW_YEAR_2022_MS
        assert Timestamp(NEW_YEAR_2022_MS) == ts

    def test_zero(self):
        assert Timestamp.zero().value == 0
        assert Timestamp.zero().is_empty()
        assert Timestamp() == Timestamp.zero()
        assert not Timestamp(1).is_empty()

    def test_from_calendar(self, afternoon):
        assert afternoon.value == NEW_YEAR_2022_MS + 15 * MILLISECONDS_PER_HOUR + 30 * MILLISECONDS_PER_MINUTE + 45_123

    def test_from_calendar_normalizes(self):
        """Out-of-range fields should roll over instead of failing."""
        assert Timestamp.from_calendar(2022, 13, 1) == Timestamp.from_calendar(2023, 1, 1)
        assert Timestamp.from_calendar(2022, 1, 32) == Timestamp.from_calendar(2022, 2, 1)
        assert Timestamp.from_calendar(2022, 1, 1, 0, 61) == Timestamp.from_calendar(2022, 1, 1, 1, 1)

    def test_now_uses_clock_and_offset(self, pin_offset, new_year_clock):
        pin_offset(28800)
        ts = Timestamp.now(new_year_clock)
        assert ts.value == NEW_YEAR_2022_MS + 8 * MILLISECONDS_PER_HOUR + 123
        assert ts.to_string() == "2022-01-01 08:00:00.123"

    def test_now_from_system_clock(self):
        before = Timestamp.now()
        after = Timestamp.now()
        assert before <= after
        assert not before.is_empty()

    def test_midnight(self, pin_offset):
        pin_offset(0)
        clock = FixedClock(NEW_YEAR_2022_MS // 1000 + 3600 * 13)
        assert Timestamp.midnight(clock) == Timestamp.from_calendar(2022, 1, 1)

    def test_from_datetime(self, pin_offset):
        pin_offset(3600)
        assert Timestamp.from_datetime(datetime(2022, 1, 1, 9, 30)) == Timestamp.from_calendar(2022, 1, 1, 9, 30)
        aware = datetime(2022, 1, 1, 9, 30, tzinfo=timezone.utc)
        assert Timestamp.from_datetime(aware) == Timestamp.from_calendar(2022, 1, 1, 10, 30)

    def test_pre_market_constructor(self):
        ts = Timestamp.pre_market(2022, 1, 1)
        assert ts == Timestamp.from_calendar(2022, 1, 1, 9)
        assert ts.only_time() == "09:00:00"


class TestDayArithmetic:
    """Test start-of-day based operations."""

    def test_start_of_day(self, afternoon):
        assert afternoon.start_of_day() == Timestamp.from_calendar(2022, 1, 1)
        assert afternoon.start_of_day().only_time() == "00:00:00"

    @pytest.mark.parametrize("value", SAMPLE_VALUES)
    def test_start_of_day_alignment(self, value):
        ts = Timestamp(value)
        start = ts.start_of_day()
        assert start.value % MILLISECONDS_PER_DAY == 0
        assert 0 <= ts.value - start.value < MILLISECONDS_PER_DAY

    def test_start_of_day_before_epoch(self):
        assert Timestamp(-1).start_of_day() == Timestamp(-MILLISECONDS_PER_DAY)
        assert Timestamp(-1).start_of_day().only_date() == "1969-12-31"

    def test_millis_since_midnight(self, afternoon):
        assert afternoon.millis_since_midnight() == (15 * 3600 + 30 * 60 + 45) * 1000 + 123
        assert Timestamp(-1).millis_since_midnight() == MILLISECONDS_PER_DAY - 1

    def test_today(self, afternoon):
        nine = afternoon.today(9, 0, 0, 0)
        assert nine.to_string() == "2022-01-01 09:00:00.000"
        assert afternoon.today() == afternoon.start_of_day()

    def test_since_is_alias_of_today(self, afternoon):
        assert afternoon.since(10, 15, 30, 250) == afternoon.today(10, 15, 30, 250)

    def test_offset(self, afternoon):
        later = afternoon.offset(2, 30, 0, 0)
        assert later.value - afternoon.value == (2 * 60 + 30) * MILLISECONDS_PER_MINUTE
        assert later.to_string() == "2022-01-01 18:00:45.123"

    def test_negative_offset(self, afternoon):
        earlier = afternoon.offset(hour=-16)
        assert earlier.to_string() == "2021-12-31 23:30:45.123"

    def test_offset_does_not_realign(self, afternoon):
        assert afternoon.offset() == afternoon

    def test_pre_market_time(self, afternoon):
        assert afternoon.pre_market_time() == Timestamp.from_calendar(2022, 1, 1, 9)

    @pytest.mark.parametrize("hour", [0, 8, 9, 12, 23])
    def test_pre_market_time_is_fixed_point(self, hour):
        ts = Timestamp.from_calendar(2022, 6, 15, hour, 59, 59, 999)
        pre_market = ts.pre_market_time()
        assert pre_market.only_time() == "09:00:00"
        assert pre_market.is_same_date(ts)

    def test_pre_market_time_with_session(self, afternoon):
        session = SessionParams(pre_market_hour=9, pre_market_minute=30)
        assert afternoon.pre_market_time(session).only_time() == "09:30:00"
        assert Timestamp.pre_market(2022, 1, 1, session).only_time() == "09:30:00"


class TestMinuteAlignment:
    """Test floor and ceil."""

    def test_floor_and_ceil(self, afternoon):
        assert afternoon.floor().to_string() == "2022-01-01 15:30:00.000"
        assert afternoon.ceil().to_string() == "2022-01-01 15:30:59.999"

    @pytest.mark.parametrize("value", SAMPLE_VALUES)
    def test_floor_ceil_bounds(self, value):
        ts = Timestamp(value)
        assert ts.floor().value % MILLISECONDS_PER_MINUTE == 0
        assert ts.ceil().value % MILLISECONDS_PER_MINUTE == MILLISECONDS_PER_MINUTE - 1
        assert ts.floor() <= ts <= ts.ceil()

    def test_negative_values(self):
        assert Timestamp(-1).floor() == Timestamp(-MILLISECONDS_PER_MINUTE)
        assert Timestamp(-1).ceil() == Timestamp(-1)


class TestCalendarQueries:
    """Test date extraction and same-date checks."""

    def test_extract(self, afternoon):
        assert afternoon.extract() == (2022, 1, 1)

    def test_yyyymmdd(self, afternoon):
        assert afternoon.yyyymmdd() == 20220101
        assert Timestamp.from_calendar(1999, 12, 31).yyyymmdd() == 19991231

    @pytest.mark.parametrize("fields", [
        (2022, 1, 1, 15, 30, 45, 123),
        (2000, 2, 29, 0, 0, 0, 0),
        (1969, 12, 31, 23, 59, 59, 999),
        (1950, 6, 1, 12, 0, 0, 1),
        (999, 1, 1, 0, 0, 0, 0),
        (0, 2, 29, 6, 0, 0, 0),
        (-44, 3, 15, 12, 0, 0, 0),
        (12000, 7, 4, 0, 0, 0, 0),
    ])
    def test_calendar_round_trip(self, fields):
        year, month, day, hour, minute, second, millisecond = fields
        ts = Timestamp.from_calendar(*fields)
        assert ts.extract() == (year, month, day)
        assert ts.start_of_day().today(hour, minute, second, millisecond) == ts

    def test_before_year_one(self):
        """The millisecond before 0001-01-01 falls on the last day of year 0."""
        ts = Timestamp(-62135596800001)
        assert ts.extract() == (0, 12, 31)
        assert ts.to_string() == "0000-12-31 23:59:59.999"
        assert Timestamp.from_calendar(0, 12, 31, 23, 59, 59, 999) == ts

    def test_small_years_are_padded(self):
        ts = Timestamp.from_calendar(999, 1, 1)
        assert ts.only_date() == "0999-01-01"
        assert ts.cache_date() == "09990101"
        assert ts.yyyymmdd() == 9990101

    def test_same_date(self):
        morning = Timestamp.from_calendar(2022, 1, 1, 8)
        evening = Timestamp.from_calendar(2022, 1, 1, 20)
        next_morning = Timestamp.from_calendar(2022, 1, 2, 8)
        assert morning.is_same_date(evening)
        assert not morning.is_same_date(next_morning)

    def test_same_date_before_epoch(self):
        """Pre-epoch values should be grouped by their calendar day."""
        assert Timestamp(-1).is_same_date(Timestamp(-MILLISECONDS_PER_DAY))
        assert not Timestamp(-1).is_same_date(Timestamp(0))


class TestFormatting:
    """Test string rendering."""

    def test_default_layout(self, afternoon):
        assert afternoon.to_string() == "2022-01-01 15:30:45.123"
        assert str(afternoon) == "2022-01-01 15:30:45.123"

    def test_named_layouts(self, afternoon):
        assert afternoon.to_string("date-only") == "2022-01-01"
        assert afternoon.to_string("compact-date") == "20220101"
        assert afternoon.to_string("time-only") == "15:30:45"
        assert afternoon.to_string("with-millis") == "2022-01-01 15:30:45.123"
        assert afternoon.to_string("date-time") == "2022-01-01 15:30:45"

    def test_custom_layout(self, afternoon):
        assert afternoon.to_string("%d/%m/%Y %H:%M") == "01/01/2022 15:30"
        assert afternoon.to_string("%H:%M:%S,%f") == "15:30:45,123"

    def test_millis_are_zero_padded(self):
        ts = Timestamp.from_calendar(2022, 1, 1, 0, 0, 0, 7)
        assert ts.to_string() == "2022-01-01 00:00:00.007"

    def test_time_only_truncates_to_seconds(self):
        ts = Timestamp.from_calendar(2022, 1, 1, 15, 30, 45, 999)
        assert ts.to_string_time_only() == "15:30:45"
        assert ts.to_string_time_only("%Y-%m-%d %H:%M:%S.%f") == "2022-01-01 15:30:45.000"

    def test_convenience_formats(self, afternoon):
        assert afternoon.only_date() == "2022-01-01"
        assert afternoon.cache_date() == "20220101"
        assert afternoon.only_time() == "15:30:45"

    def test_pre_epoch_formatting(self):
        assert Timestamp(-1).to_string() == "1969-12-31 23:59:59.999"


class TestValueSemantics:
    """Test comparison, hashing and interop."""

    @pytest.mark.parametrize("a, b", [(1, 2), (2, 1), (5, 5), (-3, 3), (-7, -8)])
    def test_total_order(self, a, b):
        ta, tb = Timestamp(a), Timestamp(b)
        assert (ta < tb) == (a < b)
        assert (ta > tb) == (a > b)
        assert (ta <= tb) == (a <= b)
        assert (ta >= tb) == (a >= b)
        assert (ta == tb) == (a == b)
        assert (ta != tb) == (a != b)
        assert [ta < tb, ta == tb, ta > tb].count(True) == 1

    def test_usable_as_mapping_key(self, afternoon):
        prices = {afternoon: 101.5}
        assert prices[Timestamp.from_calendar(2022, 1, 1, 15, 30, 45, 123)] == 101.5

    def test_sorting(self):
        values = [Timestamp(3), Timestamp(-1), Timestamp(2)]
        assert sorted(values) == [Timestamp(-1), Timestamp(2), Timestamp(3)]

    def test_immutable(self, afternoon):
        with pytest.raises(AttributeError):
            afternoon.value = 0  # type: ignore[misc]

    def test_operations_return_new_values(self, afternoon):
        original = afternoon.value
        afternoon.offset(1)
        afternoon.floor()
        afternoon.start_of_day()
        assert afternoon.value == original

    def test_unix_millis(self, pin_offset):
        pin_offset(28800)
        ts = Timestamp.from_calendar(2022, 1, 1, 8)
        assert ts.unix_millis() == NEW_YEAR_2022_MS

    def test_to_datetime(self, pin_offset, afternoon):
        pin_offset(-18000)
        assert afternoon.to_datetime() == datetime(2022, 1, 1, 15, 30, 45, 123000)
        aware = afternoon.to_datetime(aware=True)
        assert aware.utcoffset() == timedelta(hours=-5)
        assert Timestamp.from_datetime(aware) == afternoon
