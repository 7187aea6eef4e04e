"""
Millisecond conversions between UTC epoch time, local-shifted epoch time
and calendar fields.

Every timestamp in this package stores "local-shifted" milliseconds: the
UTC epoch count plus the cached local offset. Dividing such a value by
MILLISECONDS_PER_DAY yields local calendar days directly, so calendar
decomposition treats the value as a naive UTC instant and never applies
the offset a second time.
"""

from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from .clock import ClockSource, system_clock, utc_offset_seconds

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
MILLISECONDS_PER_SECOND = 1000
MILLISECONDS_PER_MINUTE = SECONDS_PER_MINUTE * MILLISECONDS_PER_SECOND
MILLISECONDS_PER_HOUR = SECONDS_PER_HOUR * MILLISECONDS_PER_SECOND
MILLISECONDS_PER_DAY = SECONDS_PER_DAY * MILLISECONDS_PER_SECOND

NANOSECONDS_PER_MILLISECOND = 1_000_000

EPOCH = datetime(1970, 1, 1)
UTC_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)

# 400 Gregorian years repeat exactly.
YEARS_PER_ERA = 400
DAYS_PER_ERA = 146097
# Days from 0000-03-01 to 1970-01-01.
UNIX_EPOCH_DAY = 719468

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class CalendarTuple(NamedTuple):
    """Calendar fields in local wall-clock terms."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


def _offset(offset: Optional[int]) -> int:
    return utc_offset_seconds() if offset is None else offset


def utc_millis_to_local(utc_ms: int, offset: Optional[int] = None) -> int:
    """UTC epoch milliseconds to local-shifted milliseconds."""
    return utc_ms + _offset(offset) * MILLISECONDS_PER_SECOND


def local_millis_to_utc(local_ms: int, offset: Optional[int] = None) -> int:
    """Local-shifted milliseconds back to UTC epoch milliseconds."""
    return local_ms - _offset(offset) * MILLISECONDS_PER_SECOND


def millis_since_midnight(ms: int) -> int:
    """Milliseconds elapsed since the start of the local day, in [0, MILLISECONDS_PER_DAY)."""
    # Python's % already floors for negative operands.
    return ms % MILLISECONDS_PER_DAY


def midnight_millis(ms: int) -> int:
    """Start of the local day containing ms."""
    return ms - millis_since_midnight(ms)


def duration_millis(hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> int:
    """Signed duration in milliseconds."""
    return (hour * MILLISECONDS_PER_HOUR
            + minute * MILLISECONDS_PER_MINUTE
            + second * MILLISECONDS_PER_SECOND
            + millisecond)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap year rule; year 0 is a leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Days since 1970-01-01 for a proleptic Gregorian date.

    Works for any integer year, including year 0 and negative years. month
    must be 1..12; day is added arithmetically.
    """
    # Count years from March so the leap day falls at the end of the year.
    if month <= 2:
        year -= 1
    era = year // YEARS_PER_ERA
    year_of_era = year - era * YEARS_PER_ERA
    march_day = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + march_day
    return era * DAYS_PER_ERA + day_of_era - UNIX_EPOCH_DAY


def civil_from_days(days: int) -> tuple[int, int, int]:
    """(year, month, day) for a count of days since 1970-01-01."""
    days += UNIX_EPOCH_DAY
    era = days // DAYS_PER_ERA
    day_of_era = days - era * DAYS_PER_ERA
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524
                   - day_of_era // 146096) // 365
    march_day = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * march_day + 2) // 153
    day = march_day - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + (3 if shifted_month < 10 else -9)
    year = year_of_era + era * YEARS_PER_ERA
    if month <= 2:
        year += 1
    return year, month, day


def weekday(year: int, month: int, day: int) -> int:
    """Day of the week, Monday is 0."""
    # 1970-01-01 was a Thursday.
    return (days_from_civil(year, month, day) + 3) % 7


def day_of_year(year: int, month: int, day: int) -> int:
    return days_from_civil(year, month, day) - days_from_civil(year, 1, 1) + 1


def calendar_to_local_millis(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> int:
    """
    Build local-shifted milliseconds from local wall-clock fields.

    Fields are not validated. Out-of-range values normalize the way a
    calendar does: month 13 is January of the next year, day 0 is the last
    day of the previous month, and time fields carry (or borrow) into days.
    Any integer year is accepted.
    """
    carry_years, month_index = divmod(month - 1, 12)
    days = days_from_civil(year + carry_years, month_index + 1, 1) + (day - 1)
    return days * MILLISECONDS_PER_DAY + duration_millis(hour, minute, second, millisecond)


def local_millis_to_calendar(local_ms: int) -> CalendarTuple:
    """Decompose local-shifted milliseconds into calendar fields."""
    days, elapsed = divmod(local_ms, MILLISECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, elapsed = divmod(elapsed, MILLISECONDS_PER_HOUR)
    minute, elapsed = divmod(elapsed, MILLISECONDS_PER_MINUTE)
    second, millisecond = divmod(elapsed, MILLISECONDS_PER_SECOND)
    return CalendarTuple(year, month, day, hour, minute, second, millisecond)


def clock_to_local_millis(seconds: int, nanoseconds: int, offset: Optional[int] = None) -> int:
    """Clock reading to local-shifted milliseconds; sub-millisecond digits are truncated."""
    seconds += _offset(offset)
    return (seconds * MILLISECONDS_PER_SECOND
            + nanoseconds // NANOSECONDS_PER_MILLISECOND % MILLISECONDS_PER_SECOND)


def now_millis(clock: Optional[ClockSource] = None) -> int:
    """Current local-shifted milliseconds."""
    seconds, nanoseconds = (clock or system_clock).now()
    return clock_to_local_millis(seconds, nanoseconds)


def datetime_to_local_millis(dt: datetime, offset: Optional[int] = None) -> int:
    """
    Convert a datetime to local-shifted milliseconds.

    Aware datetimes go through their UTC instant; naive ones are taken as
    local wall-clock fields. Microseconds are truncated.
    """
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        return utc_millis_to_local((dt - UTC_EPOCH) // ONE_MILLISECOND, offset)
    return (dt.replace(tzinfo=None) - EPOCH) // ONE_MILLISECOND


def local_millis_to_datetime(local_ms: int, aware: bool = False, offset: Optional[int] = None) -> datetime:
    """
    Convert local-shifted milliseconds to a datetime.

    Returns naive local wall-clock time, or with aware=True the same fields
    tagged with the cached fixed offset.

    Raises:
        OverflowError: if the value lies outside the years datetime supports
    """
    wall_clock = EPOCH + timedelta(milliseconds=local_ms)
    if not aware:
        return wall_clock
    return wall_clock.replace(tzinfo=timezone(timedelta(seconds=_offset(offset))))
