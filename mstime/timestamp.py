"""
Millisecond timestamp value type.

A Timestamp wraps a single integer: milliseconds since 1970-01-01T00:00:00
shifted by the process's cached local offset. Values are immutable,
hashable and totally ordered by that integer, so they can be shared across
threads and used as mapping keys without locking. Every operation returns a
new value.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from .clock import ClockSource
from .layouts import (
    CACHE_DATE_LAYOUT,
    DEFAULT_LAYOUT,
    ONLY_DATE_LAYOUT,
    ONLY_TIME_LAYOUT,
    format_calendar,
)
from .millis import (
    MILLISECONDS_PER_MINUTE,
    MILLISECONDS_PER_SECOND,
    calendar_to_local_millis,
    datetime_to_local_millis,
    duration_millis,
    local_millis_to_calendar,
    local_millis_to_datetime,
    local_millis_to_utc,
    midnight_millis,
    millis_since_midnight,
    now_millis,
)

if TYPE_CHECKING:
    from .config.defaults import SessionParams

PRE_MARKET_HOUR = 9
PRE_MARKET_MINUTE = 0
PRE_MARKET_SECOND = 0


def _pre_market_fields(session: Optional["SessionParams"]) -> tuple[int, int, int]:
    if session is None:
        return PRE_MARKET_HOUR, PRE_MARKET_MINUTE, PRE_MARKET_SECOND
    return session.pre_market_hour, session.pre_market_minute, session.pre_market_second


@dataclass(frozen=True, order=True)
class Timestamp:
    """Local-shifted epoch milliseconds."""

    value: int = 0

    # Construction

    @classmethod
    def from_millis(cls, ms: int) -> "Timestamp":
        return cls(ms)

    @classmethod
    def from_calendar(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> "Timestamp":
        """
        Build a timestamp from local wall-clock fields.

        Out-of-range fields are normalized rather than rejected, so
        from_calendar(2022, 13, 1) is 2023-01-01.
        """
        return cls(calendar_to_local_millis(year, month, day, hour, minute, second, millisecond))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """Aware datetimes keep their instant; naive ones are local wall-clock time."""
        return cls(datetime_to_local_millis(dt))

    @classmethod
    def from_string(cls, text: str) -> "Timestamp":
        return cls.parse(text)

    @classmethod
    def parse(cls, text: str) -> "Timestamp":
        """
        Parse a date or date-time string.

        Raises:
            ParseError: if no known layout matches
        """
        from .parser import parse

        return parse(text)

    @classmethod
    def parse_time(cls, text: str) -> "Timestamp":
        """
        Parse a time string, also accepting fully qualified date-times.

        Raises:
            ParseError: if no known layout matches
        """
        from .parser import parse_time_only

        return parse_time_only(text)

    @classmethod
    def now(cls, clock: Optional[ClockSource] = None) -> "Timestamp":
        return cls(now_millis(clock))

    @classmethod
    def zero(cls) -> "Timestamp":
        return cls(0)

    @classmethod
    def midnight(cls, clock: Optional[ClockSource] = None) -> "Timestamp":
        """Start of the current local day."""
        return cls(midnight_millis(now_millis(clock)))

    @classmethod
    def pre_market(
        cls, year: int, month: int, day: int, session: Optional["SessionParams"] = None
    ) -> "Timestamp":
        """Pre-market open on the given date."""
        hour, minute, second = _pre_market_fields(session)
        return cls.from_calendar(year, month, day, hour, minute, second, 0)

    # Arithmetic

    def is_empty(self) -> bool:
        return self.value == 0

    def millis_since_midnight(self) -> int:
        return millis_since_midnight(self.value)

    def start_of_day(self) -> "Timestamp":
        return Timestamp(midnight_millis(self.value))

    def today(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> "Timestamp":
        """The given time of day on this timestamp's date."""
        return Timestamp(midnight_millis(self.value) + duration_millis(hour, minute, second, millisecond))

    def since(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> "Timestamp":
        return self.today(hour, minute, second, millisecond)

    def offset(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> "Timestamp":
        """Shift by a signed duration without realigning to the day."""
        return Timestamp(self.value + duration_millis(hour, minute, second, millisecond))

    def pre_market_time(self, session: Optional["SessionParams"] = None) -> "Timestamp":
        hour, minute, second = _pre_market_fields(session)
        return self.since(hour, minute, second, 0)

    def floor(self) -> "Timestamp":
        """Start of the minute."""
        return Timestamp(self.value - self.value % MILLISECONDS_PER_MINUTE)

    def ceil(self) -> "Timestamp":
        """Last millisecond of the minute."""
        return Timestamp(self.floor().value + MILLISECONDS_PER_MINUTE - 1)

    # Calendar

    def extract(self) -> tuple[int, int, int]:
        """(year, month, day) in local terms."""
        fields = local_millis_to_calendar(self.value)
        return fields.year, fields.month, fields.day

    def yyyymmdd(self) -> int:
        year, month, day = self.extract()
        return year * 10000 + month * 100 + day

    def is_same_date(self, other: "Timestamp") -> bool:
        # Floor alignment keeps pre-epoch values on the right day.
        return midnight_millis(self.value) == midnight_millis(other.value)

    # Formatting

    def to_string(self, layout: Optional[str] = None) -> str:
        """Format with a catalogue name or custom strftime pattern; %f is milliseconds."""
        return format_calendar(local_millis_to_calendar(self.value), layout or DEFAULT_LAYOUT)

    def to_string_time_only(self, layout: Optional[str] = None) -> str:
        """Format truncated to whole seconds, time of day by default."""
        seconds = self.value - self.value % MILLISECONDS_PER_SECOND
        return format_calendar(local_millis_to_calendar(seconds), layout or ONLY_TIME_LAYOUT)

    def only_date(self) -> str:
        return self.to_string(ONLY_DATE_LAYOUT)

    def cache_date(self) -> str:
        return self.to_string(CACHE_DATE_LAYOUT)

    def only_time(self) -> str:
        return self.to_string_time_only(ONLY_TIME_LAYOUT)

    # Interop

    def to_datetime(self, aware: bool = False) -> datetime:
        return local_millis_to_datetime(self.value, aware=aware)

    def unix_millis(self) -> int:
        """UTC epoch milliseconds."""
        return local_millis_to_utc(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.to_string()
