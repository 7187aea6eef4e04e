"""
Centralized logging configuration for mstime.

This module provides standardized logging configuration using structlog.
The timestamp core itself only emits debug/info events (offset snapshots,
matched parse layouts). Its loggers sit on top of the standard library
logging module, so a host that never calls configure_logging only sees
warnings, as with any other library.
"""
import logging
import sys

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str, **initial_values) -> FilteringBoundLogger:
    """
    Get a structlog logger backed by the standard library logger of that name.

    The processors are looked up on every call, so configure_logging (or a
    test capturing logs) applies even to loggers created at import time.

    Args:
        name: Logger name (typically __name__)
        **initial_values: Context bound to every event

    Returns:
        Configured structlog logger instance
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
        **initial_values,
    )


def get_clock_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the clock subsystem.

    Used by the offset cache and the startup wiring so that every event
    touching the process-wide UTC offset can be filtered together.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for clock events
    """
    return get_logger(name, subsystem="clock")


def log_offset_snapshot(
    logger: FilteringBoundLogger,
    offset_seconds: int,
    source: str,
) -> None:
    """
    Log the captured UTC offset with standardized fields.

    Args:
        logger: Structlog logger instance
        offset_seconds: Seconds east of UTC that were captured
        source: Where the value came from ("host", "pinned" or "fallback")
    """
    bound_logger = logger.bind(
        utc_offset_seconds=offset_seconds,
        offset_source=source,
    )

    if source == "fallback":
        bound_logger.warning("Host did not report a UTC offset, using UTC")
    else:
        bound_logger.info("UTC offset captured")
