"""
Configuration error classifications.

These errors mean the process was started with settings it cannot honour
and require a configuration change to resolve.
"""

from typing import Any, Dict, List, Optional


class ConfigurationError(Exception):
    """Invalid or conflicting configuration."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.errors = errors or []
        self.context = context or {}
        self.recoverable = False


class OffsetCacheError(ConfigurationError):
    """The UTC offset snapshot was pinned after it had already been read."""

    def __init__(self, message: str, current_offset: Optional[int] = None,
                 requested_offset: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_offset = current_offset
        self.requested_offset = requested_offset
