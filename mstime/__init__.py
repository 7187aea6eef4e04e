"""
mstime - millisecond timestamps for market-data systems

Immutable, day-aligned timestamps stored as local-shifted epoch
milliseconds, with a cached process-wide UTC offset, session helpers such
as pre-market time, and a multi-layout string parser.
"""

from .errors import ParseError
from .timestamp import Timestamp

__version__ = "0.1.0"
__author__ = "mstime Team"

__all__ = ["ParseError", "Timestamp"]
