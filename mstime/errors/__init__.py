"""
Error classification for timestamp handling.

Parse failures are recoverable and carry a zero-valued fallback timestamp;
configuration failures are not recoverable at runtime.
"""

from .timestamp_errors import (
    TimestampError,
    ParseError,
)
from .configuration import (
    ConfigurationError,
    OffsetCacheError,
)

__all__ = [
    # Timestamp Errors
    "TimestampError",
    "ParseError",
    # Configuration Errors
    "ConfigurationError",
    "OffsetCacheError",
]
