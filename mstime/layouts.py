"""
Layout catalogue for formatting and parsing timestamps.

Layouts are strftime-style patterns. Because timestamps carry millisecond
resolution, %f stands for three-digit milliseconds here rather than the
six-digit microseconds of the standard library. Years always render with at
least four digits, so every formatted date parses back.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

from .millis import CalendarTuple, day_of_year, weekday

DEFAULT_LAYOUT = "%Y-%m-%d %H:%M:%S.%f"
ONLY_DATE_LAYOUT = "%Y-%m-%d"
CACHE_DATE_LAYOUT = "%Y%m%d"
ONLY_TIME_LAYOUT = "%H:%M:%S"
TIME_LAYOUT_WITH_MS = "%Y-%m-%d %H:%M:%S.%f"
DATE_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"

NAMED_LAYOUTS: dict[str, str] = {
    "default": DEFAULT_LAYOUT,
    "date-only": ONLY_DATE_LAYOUT,
    "compact-date": CACHE_DATE_LAYOUT,
    "time-only": ONLY_TIME_LAYOUT,
    "with-millis": TIME_LAYOUT_WITH_MS,
    "date-time": DATE_TIME_LAYOUT,
}

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTH_NAMES = ("January", "February", "March", "April", "May", "June", "July",
               "August", "September", "October", "November", "December")
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
                 "Saturday", "Sunday")

_DIRECTIVE = re.compile(r"%(.)")

_FORMATTERS: dict[str, Callable[[CalendarTuple], str]] = {
    "Y": lambda f: f"{f.year:04d}",
    "y": lambda f: f"{f.year % 100:02d}",
    "m": lambda f: f"{f.month:02d}",
    "d": lambda f: f"{f.day:02d}",
    "H": lambda f: f"{f.hour:02d}",
    "I": lambda f: f"{f.hour % 12 or 12:02d}",
    "p": lambda f: "AM" if f.hour < 12 else "PM",
    "M": lambda f: f"{f.minute:02d}",
    "S": lambda f: f"{f.second:02d}",
    "f": lambda f: f"{f.millisecond:03d}",
    "j": lambda f: f"{day_of_year(f.year, f.month, f.day):03d}",
    "b": lambda f: MONTH_ABBREVIATIONS[f.month - 1],
    "B": lambda f: MONTH_NAMES[f.month - 1],
    "a": lambda f: WEEKDAY_ABBREVIATIONS[weekday(f.year, f.month, f.day)],
    "A": lambda f: WEEKDAY_NAMES[weekday(f.year, f.month, f.day)],
    "%": lambda f: "%",
}


def resolve_layout(layout: str) -> str:
    """Map a catalogue name to its pattern; any other string is a custom pattern."""
    return NAMED_LAYOUTS.get(layout, layout)


def _render_directive(fields: CalendarTuple, directive: str) -> str:
    formatter = _FORMATTERS.get(directive)
    if formatter is not None:
        return formatter(fields)
    # Rarer directives go through strftime and need a year in 1..9999.
    wall_clock = datetime(fields.year, fields.month, fields.day,
                          fields.hour, fields.minute, fields.second)
    return wall_clock.strftime(f"%{directive}")


def format_calendar(fields: CalendarTuple, layout: str) -> str:
    """Render calendar fields with a named or custom layout."""
    return _DIRECTIVE.sub(
        lambda match: _render_directive(fields, match.group(1)),
        resolve_layout(layout),
    )


class ZonePolicy(Enum):
    """How a parse layout determines the UTC offset of its text."""
    LOCAL = "local"                # no zone in the text, local wall clock
    UTC = "utc"                    # literal trailing Z
    OFFSET = "offset"              # numeric %z offset
    ABBREVIATION = "abbreviation"  # trailing zone abbreviation such as GMT


# Every numeric field has a fixed width.
_PARSE_FIELDS = {
    "Y": r"(?P<year>\d{4})",
    "m": r"(?P<month>\d{2})",
    "d": r"(?P<day>\d{2})",
    "H": r"(?P<hour>\d{2})",
    "M": r"(?P<minute>\d{2})",
    "S": r"(?P<second>\d{2})",
    "f": r"(?P<fraction>\d{1,9})",
    "b": r"(?P<month_name>[A-Za-z]{3})",
    "a": r"(?P<weekday_name>[A-Za-z]{3})",
    "z": r"(?P<offset>Z|[+-]\d{2}:\d{2})",
    "Z": r"(?P<zone>[A-Z]{1,5})",
}

# Seconds without an explicit %f still accept a fractional part.
_TRAILING_FRACTION = r"(?:[.,](?P<fraction>\d{1,9}))?"


def compile_layout(pattern: str) -> "re.Pattern":
    """
    Translate a parse pattern into a fixed-width regular expression.

    Raises:
        ValueError: if the pattern uses a directive the parser does not support
    """
    directives = [match.group(1) for match in _DIRECTIVE.finditer(pattern)]
    has_fraction = "f" in directives

    parts = []
    position = 0
    for match in _DIRECTIVE.finditer(pattern):
        parts.append(re.escape(pattern[position:match.start()]))
        directive = match.group(1)
        if directive == "%":
            parts.append("%")
        elif directive in _PARSE_FIELDS:
            parts.append(_PARSE_FIELDS[directive])
            if directive == "S" and not has_fraction:
                parts.append(_TRAILING_FRACTION)
        else:
            raise ValueError(f"unsupported parse directive %{directive} in {pattern!r}")
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return re.compile("".join(parts), re.ASCII)


@dataclass(frozen=True)
class ParseLayout:
    """A pattern tried by the parser, matched against the whole text."""
    pattern: str
    zone: ZonePolicy = ZonePolicy.LOCAL
    regex: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", compile_layout(self.pattern))

    def __str__(self) -> str:
        return self.pattern


DATE_TIME_MS = ParseLayout("%Y-%m-%d %H:%M:%S.%f")
DATE_TIME = ParseLayout("%Y-%m-%d %H:%M:%S")
DATE_ONLY = ParseLayout("%Y-%m-%d")
COMPACT_DATE = ParseLayout("%Y%m%d")
SLASH_DATE_TIME = ParseLayout("%Y/%m/%d %H:%M:%S")
US_DATE_TIME = ParseLayout("%m/%d/%Y %H:%M:%S")
TIME_FIRST = ParseLayout("%H:%M:%S %d-%m-%Y")
COMPACT_DATE_TIME = ParseLayout("%Y%m%d %H%M%S")
ISO8601_UTC = ParseLayout("%Y-%m-%dT%H:%M:%SZ", ZonePolicy.UTC)
ISO8601_OFFSET = ParseLayout("%Y-%m-%dT%H:%M:%S%z", ZonePolicy.OFFSET)
RFC1123 = ParseLayout("%a, %d %b %Y %H:%M:%S %Z", ZonePolicy.ABBREVIATION)
MONTH_NAME_DATE_TIME = ParseLayout("%b %d %Y %H:%M:%S")
TIME_ONLY = ParseLayout("%H:%M:%S")
COMPACT_TIME = ParseLayout("%H%M%S")

# More specific layouts come first so a looser one never swallows part of
# a longer string.
PARSE_LAYOUTS: tuple[ParseLayout, ...] = (
    DATE_TIME_MS,
    DATE_TIME,
    DATE_ONLY,
    COMPACT_DATE,
    SLASH_DATE_TIME,
    US_DATE_TIME,
    TIME_FIRST,
    COMPACT_DATE_TIME,
    ISO8601_UTC,
    ISO8601_OFFSET,
    RFC1123,
    MONTH_NAME_DATE_TIME,
)

TIME_ONLY_PARSE_LAYOUTS: tuple[ParseLayout, ...] = (
    TIME_ONLY,
    DATE_TIME_MS,
    DATE_TIME,
    DATE_ONLY,
    COMPACT_DATE,
    SLASH_DATE_TIME,
    US_DATE_TIME,
    TIME_FIRST,
    COMPACT_TIME,
    COMPACT_DATE_TIME,
    ISO8601_UTC,
    ISO8601_OFFSET,
    RFC1123,
    MONTH_NAME_DATE_TIME,
)
