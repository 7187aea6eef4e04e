"""
Clock source and process-wide UTC offset snapshot.

The clock source reports the host wall clock as (seconds, nanoseconds) since
the Unix epoch, independent of any timezone. The offset cache captures the
local zone's offset east of UTC exactly once; later zone or DST changes are
not observed by this process.
"""

import threading
import time
from typing import Optional, Protocol

from .errors import OffsetCacheError
from .logging.config import get_clock_logger, log_offset_snapshot

NANOSECONDS_PER_SECOND = 1_000_000_000

logger = get_clock_logger(__name__)


class ClockSource(Protocol):
    """Injectable wall-clock reading."""

    def now(self) -> tuple[int, int]:
        """Return (seconds, nanoseconds) since the Unix epoch, UTC."""
        ...  # pragma: no cover


class SystemClock:
    """Host wall clock."""

    def now(self) -> tuple[int, int]:
        return divmod(time.time_ns(), NANOSECONDS_PER_SECOND)


class FixedClock:
    """
    Deterministic clock for tests and replays.

    Usage:
        clock = FixedClock(1640995200)
        Timestamp.now(clock)
    """

    def __init__(self, seconds: int, nanoseconds: int = 0) -> None:
        extra, nanoseconds = divmod(nanoseconds, NANOSECONDS_PER_SECOND)
        self._seconds = seconds + extra
        self._nanoseconds = nanoseconds

    def now(self) -> tuple[int, int]:
        return self._seconds, self._nanoseconds

    def advance(self, seconds: int = 0, nanoseconds: int = 0) -> None:
        """Move the clock forward (negative values move it back)."""
        total = (self._seconds + seconds) * NANOSECONDS_PER_SECOND + self._nanoseconds + nanoseconds
        self._seconds, self._nanoseconds = divmod(total, NANOSECONDS_PER_SECOND)


def host_utc_offset() -> Optional[int]:
    """Seconds the host's current local zone is east of UTC, None if unknown."""
    return getattr(time.localtime(), "tm_gmtoff", None)


class OffsetCache:
    """
    Initialize-once snapshot of the local UTC offset.

    The first read captures the host offset (or a value pinned beforehand);
    every later read returns the same value without taking the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._offset: Optional[int] = None

    @property
    def is_initialized(self) -> bool:
        return self._offset is not None

    @property
    def utc_to_local(self) -> int:
        """Seconds the local zone is east of UTC."""
        offset = self._offset
        if offset is None:
            offset = self._initialize()
        return offset

    @property
    def local_to_utc(self) -> int:
        return -self.utc_to_local

    def pin(self, seconds: int) -> None:
        """
        Fix the snapshot to an explicit offset before first use.

        Raises:
            OffsetCacheError: if a different offset has already been captured
        """
        with self._lock:
            if self._offset is None:
                self._offset = seconds
                log_offset_snapshot(logger, seconds, "pinned")
                return
            current = self._offset

        if current != seconds:
            raise OffsetCacheError(
                f"UTC offset already captured as {current}s, cannot pin {seconds}s",
                current_offset=current,
                requested_offset=seconds,
            )

    def _initialize(self) -> int:
        with self._lock:
            if self._offset is None:
                offset = host_utc_offset()
                source = "host"
                if offset is None:
                    offset = 0
                    source = "fallback"
                self._offset = offset
                log_offset_snapshot(logger, offset, source)
            return self._offset


system_clock = SystemClock()
offset_cache = OffsetCache()


def utc_offset_seconds() -> int:
    """Cached offset of the local zone east of UTC, in seconds."""
    return offset_cache.utc_to_local
