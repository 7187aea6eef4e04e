"""Default configuration parameters for the timestamp core."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClockParams:
    """Clock and offset snapshot parameters."""
    utc_offset_seconds: Optional[int] = None         # None = ask the host once


@dataclass(frozen=True)
class SessionParams:
    """Trading session markers."""
    pre_market_hour: int = 9
    pre_market_minute: int = 0
    pre_market_second: int = 0


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    clock: ClockParams
    session: SessionParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        clock=ClockParams(),
        session=SessionParams(),
        logging=LoggingParams(),
    )
