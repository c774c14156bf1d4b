"""Conversion of human-readable durations to milliseconds.

Accepted inputs:
- ``int`` / ``float``: already in milliseconds (``1337``)
- numeric strings: milliseconds (``"1337"``)
- amount + unit strings: ``"2 seconds"``, ``"1.5h"``, ``"20 secs"``, ``"1 week"``
- ``datetime.timedelta``
"""

import re
from datetime import timedelta
from typing import Dict, Union

from ..exceptions import InvalidDurationError

Duration = Union[int, float, str, timedelta]

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
YEAR = DAY * 365.25

_UNITS: Dict[str, float] = {
    "milliseconds": 1,
    "millisecond": 1,
    "msecs": 1,
    "msec": 1,
    "ms": 1,
    "seconds": SECOND,
    "second": SECOND,
    "secs": SECOND,
    "sec": SECOND,
    "s": SECOND,
    "minutes": MINUTE,
    "minute": MINUTE,
    "mins": MINUTE,
    "min": MINUTE,
    "m": MINUTE,
    "hours": HOUR,
    "hour": HOUR,
    "hrs": HOUR,
    "hr": HOUR,
    "h": HOUR,
    "days": DAY,
    "day": DAY,
    "d": DAY,
    "weeks": WEEK,
    "week": WEEK,
    "wks": WEEK,
    "wk": WEEK,
    "w": WEEK,
    "years": YEAR,
    "year": YEAR,
    "yrs": YEAR,
    "yr": YEAR,
    "y": YEAR,
}

_DURATION_RE = re.compile(r"^(\d*\.?\d+) *([a-z]+)?$", re.IGNORECASE)

# Guards the regex against pathological input
MAX_DURATION_LENGTH = 100


def parse_duration(value: Duration) -> int:
    """Convert a duration to whole milliseconds.

    Args:
        value: Milliseconds as a number, a numeric or human-readable string,
            or a ``timedelta``

    Returns:
        The duration in milliseconds, rounded down to an integer

    Raises:
        InvalidDurationError: If the value cannot be parsed or is negative
    """
    if isinstance(value, bool):
        raise InvalidDurationError(value, "booleans are not durations")

    if isinstance(value, timedelta):
        millis = value.total_seconds() * SECOND
    elif isinstance(value, (int, float)):
        millis = value
    elif isinstance(value, str):
        millis = _parse_duration_string(value)
    else:
        raise InvalidDurationError(value, f"unsupported type {type(value).__name__}")

    if millis != millis or millis == float("inf"):
        raise InvalidDurationError(value, "must be finite")
    if millis < 0:
        raise InvalidDurationError(value, "must not be negative")

    return int(millis)


def _parse_duration_string(value: str) -> float:
    text = value.strip()
    if not text or len(text) > MAX_DURATION_LENGTH:
        raise InvalidDurationError(value)

    match = _DURATION_RE.match(text)
    if not match:
        raise InvalidDurationError(value)

    amount = float(match.group(1))
    unit = match.group(2)
    if unit is None:
        return amount

    multiplier = _UNITS.get(unit.lower())
    if multiplier is None:
        raise InvalidDurationError(value, f"unknown unit {unit!r}")
    return amount * multiplier
