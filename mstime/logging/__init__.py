"""
Logging configuration and utilities for mstime.
"""
from .config import configure_logging, get_clock_logger, get_logger

__all__ = ["configure_logging", "get_clock_logger", "get_logger"]
