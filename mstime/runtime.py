"""
Startup wiring.

Loads configuration, configures logging and pins the UTC offset snapshot
before the first timestamp is built. Calling initialize is optional: without
it the offset is read from the host on first use and the default session
markers apply.
"""

from pathlib import Path
from typing import Any, Optional

from . import clock
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .logging.config import configure_logging, get_clock_logger

logger = get_clock_logger(__name__)


def initialize(
    config_dir: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
    configure_logs: bool = True,
) -> DefaultConfig:
    """
    Load configuration and prepare the process-wide clock state.

    Raises:
        ConfigurationError: if the configuration is invalid
        OffsetCacheError: if a different offset was already captured
    """
    config = ConfigLoader.create(config_dir).load(overrides)

    if configure_logs:
        configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    if config.clock.utc_offset_seconds is not None:
        clock.offset_cache.pin(config.clock.utc_offset_seconds)

    logger.info(
        "mstime initialized",
        utc_offset_seconds=clock.offset_cache.utc_to_local,
        pre_market_hour=config.session.pre_market_hour,
    )
    return config
