"""
Time Codec - convert between "HH:MM" wall-clock strings and day-minutes.

A day-minute is an integer in [0, 1440). All engine arithmetic happens in
day-minutes; strings only appear at the document and API boundary.
"""

import math
import re

from timeline.errors import InvalidTimeFormat

MINUTES_PER_DAY = 1440

_HHMM_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def to_minutes(value: str) -> int:
    """
    Parse an "HH:MM" string into minutes since midnight.

    Raises:
        InvalidTimeFormat: if the string is not two-digit HH:MM or a field is
            out of range (hours 0-23, minutes 0-59).
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected an HH:MM string, got {type(value).__name__}")

    match = _HHMM_RE.fullmatch(value)
    if not match:
        raise InvalidTimeFormat(f"Invalid time format {value!r} (use HH:MM)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def to_time_string(minutes: float) -> str:
    """Format minutes as "HH:MM", wrapping any value (negative too) into one day."""
    m = math.floor(minutes) % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def format_duration(minutes: float) -> str:
    """Human label for a span, e.g. 270 -> "4h 30min"."""
    m = max(0, math.floor(minutes))
    return f"{m // 60}h {m % 60}min"


def day_slots(slot_minutes: int = 30) -> list[str]:
    """Start times of the drop-target grid, e.g. 48 half-hour slots."""
    if slot_minutes <= 0 or MINUTES_PER_DAY % slot_minutes:
        raise ValueError(f"Slot size must divide the day evenly, got {slot_minutes}")
    return [to_time_string(m) for m in range(0, MINUTES_PER_DAY, slot_minutes)]
