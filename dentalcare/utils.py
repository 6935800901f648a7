"""Shared time helpers used across the scheduling core."""

from datetime import datetime, time

_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M")


def parse_time(value: str) -> time:
    """Parse a slot label or clock time into a ``datetime.time``.

    Examples:
        >>> parse_time("9:00 AM")
        datetime.time(9, 0)
        >>> parse_time("14:30")
        datetime.time(14, 30)
    """
    cleaned = " ".join(value.strip().upper().split())
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised time: {value!r}")


def format_time_label(value: time) -> str:
    """Format a time the way the dashboard shows it, e.g. ``'2:30 PM'``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    """Inverse of ``to_minutes`` for values within a single day."""
    return time(minutes // 60, minutes % 60)
