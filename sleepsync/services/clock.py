"""Minute-of-day arithmetic on "HH:MM" strings.

No dates are modelled: everything wraps modulo 24h, and an end time that reads
earlier than its start is taken to be on the next day.
"""

import math
import re
from typing import Optional

MINUTES_PER_DAY = 1440

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidTimeError(ValueError):
    """Raised for a non-blank time string that is not a valid "HH:MM"."""


def time_to_minutes(time: Optional[str]) -> int:
    """Return minutes since midnight. Blank input counts as midnight."""
    if time is None or not time.strip():
        return 0
    match = _TIME_RE.match(time.strip())
    if not match:
        raise InvalidTimeError(f"Invalid time of day: {time!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Time of day out of range: {time!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Render minutes as zero-padded "HH:MM", wrapped into a single day."""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(time: str, delta: int) -> str:
    return minutes_to_time(time_to_minutes(time) + delta)


def duration_between(start: str, end: str) -> int:
    """Minutes from start to end, assuming end is the same day or the next."""
    diff = time_to_minutes(end) - time_to_minutes(start)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upwards (76.5 -> 77)."""
    return math.floor(value + 0.5)


def format_hours(minutes: int) -> float:
    """Minutes as hours rounded to one decimal (e.g. 318 -> 5.3)."""
    return round(minutes / 60, 1)
