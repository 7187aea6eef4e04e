"""
Multi-layout timestamp parser.

Each entry point walks a fixed, ordered list of layouts and returns the
first one that matches the whole input. Numeric fields have fixed widths
and are range checked. Text without zone information is read as local
wall-clock time; zoned text is converted through its UTC instant and
shifted by the cached local offset.
"""

import re
import time
from typing import Iterable

from .errors import ParseError
from .layouts import (
    MONTH_ABBREVIATIONS,
    PARSE_LAYOUTS,
    TIME_ONLY_PARSE_LAYOUTS,
    WEEKDAY_ABBREVIATIONS,
    ParseLayout,
    ZonePolicy,
)
from .logging.config import get_logger
from .millis import (
    MILLISECONDS_PER_SECOND,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    CalendarTuple,
    calendar_to_local_millis,
    days_in_month,
    utc_millis_to_local,
)
from .timestamp import Timestamp

logger = get_logger(__name__)

UTC_ABBREVIATIONS = frozenset({"UTC", "GMT", "UT", "Z"})

# Layouts without a date part land on the first day of year 0.
DEFAULT_YEAR = 0

_MONTHS = {name.lower(): number for number, name in enumerate(MONTH_ABBREVIATIONS, start=1)}
_WEEKDAYS = frozenset(name.lower() for name in WEEKDAY_ABBREVIATIONS)


def _zone_abbreviation_offset(abbreviation: str) -> int:
    """Seconds east of UTC for a zone abbreviation."""
    if abbreviation in UTC_ABBREVIATIONS:
        return 0
    standard, daylight = time.tzname
    if abbreviation == standard:
        return -time.timezone
    if abbreviation == daylight:
        return -time.altzone
    # Unknown abbreviations carry no usable offset and are read as UTC.
    return 0


def _numeric_offset(text: str) -> int:
    if text == "Z":
        return 0
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"zone offset {text!r} out of range")
    seconds = hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE
    return -seconds if text[0] == "-" else seconds


def _number(groups: dict, name: str, default: int) -> int:
    value = groups.get(name)
    return default if value is None else int(value)


def _calendar_fields(found: "re.Match") -> CalendarTuple:
    groups = found.groupdict()

    month_name = groups.get("month_name")
    if month_name is not None:
        if month_name.lower() not in _MONTHS:
            raise ValueError(f"unknown month name {month_name!r}")
        month = _MONTHS[month_name.lower()]
    else:
        month = _number(groups, "month", 1)

    weekday_name = groups.get("weekday_name")
    if weekday_name is not None and weekday_name.lower() not in _WEEKDAYS:
        raise ValueError(f"unknown weekday name {weekday_name!r}")

    year = _number(groups, "year", DEFAULT_YEAR)
    day = _number(groups, "day", 1)
    hour = _number(groups, "hour", 0)
    minute = _number(groups, "minute", 0)
    second = _number(groups, "second", 0)

    fraction = groups.get("fraction")
    millisecond = int(fraction[:3].ljust(3, "0")) if fraction else 0

    if not 1 <= month <= 12:
        raise ValueError(f"month {month} out of range")
    if not 1 <= day <= days_in_month(year, month):
        raise ValueError(f"day {day} out of range")
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"time {hour:02d}:{minute:02d}:{second:02d} out of range")

    return CalendarTuple(year, month, day, hour, minute, second, millisecond)


def match_layout(text: str, layout: ParseLayout) -> int:
    """
    Strictly match text against one layout.

    Returns:
        Local-shifted milliseconds

    Raises:
        ValueError: if the text does not match the layout
    """
    found = layout.regex.fullmatch(text)
    if found is None:
        raise ValueError(f"{text!r} does not match {layout}")

    wall_clock = calendar_to_local_millis(*_calendar_fields(found))

    if layout.zone is ZonePolicy.LOCAL:
        return wall_clock
    if layout.zone is ZonePolicy.OFFSET:
        offset = _numeric_offset(found.group("offset"))
    elif layout.zone is ZonePolicy.ABBREVIATION:
        offset = _zone_abbreviation_offset(found.group("zone"))
    else:
        offset = 0
    return utc_millis_to_local(wall_clock - offset * MILLISECONDS_PER_SECOND)


def parse_with_layouts(text: str, layouts: Iterable[ParseLayout], kind: str = "date") -> Timestamp:
    """
    Return the timestamp of the first layout that matches text.

    Raises:
        ParseError: if no layout matches; carries the zero timestamp as fallback
    """
    layouts = tuple(layouts)
    for layout in layouts:
        try:
            ms = match_layout(text, layout)
        except ValueError:
            continue
        logger.debug("Parsed timestamp", text=text, layout=str(layout), value=ms)
        return Timestamp(ms)

    raise ParseError(
        f"unable to parse {kind} string: {text}",
        text=text,
        layouts=[str(layout) for layout in layouts],
        fallback=Timestamp.zero(),
    )


def parse(text: str) -> Timestamp:
    """Parse a date or date-time string, trying the full date-time layouts first."""
    return parse_with_layouts(text, PARSE_LAYOUTS, kind="date")


def parse_time_only(text: str) -> Timestamp:
    """Parse a time string, trying the bare hh:mm:ss layout first."""
    return parse_with_layouts(text, TIME_ONLY_PARSE_LAYOUTS, kind="time")
