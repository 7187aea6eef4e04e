"""
Timestamp error classifications.

Parsing failures are always recoverable: the caller receives the original
text together with a well-defined zero timestamp it may fall back to.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

if TYPE_CHECKING:
    from ..timestamp import Timestamp


class TimestampError(Exception):
    """Base class for timestamp construction and conversion issues."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class ParseError(TimestampError):
    """No candidate layout matched the input text."""

    def __init__(self, message: str, text: str,
                 layouts: Optional[Sequence[str]] = None,
                 fallback: Optional["Timestamp"] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.text = text
        self.layouts = list(layouts or [])
        self.fallback = fallback
