"""
Slot generation from working-hour settings.

Pure functions: given a day's opening hours, appointment length and buffer
time, produce the ordered slot start times for that day. Consecutive slots
start exactly ``duration + buffer`` minutes apart and the last slot always
ends at or before closing time.

Usage:
    hours = DayHours(start=time(9, 0), end=time(17, 0))
    generate_slots(hours, duration=30, buffer=15)
    # [09:00, 09:45, 10:30, ..., 16:30]
"""

import logging
from datetime import date, time
from typing import Iterable

from dentalcare.errors import ConfigurationError
from dentalcare.schemas.appointment_schema import SlotTemplate
from dentalcare.schemas.settings_schema import ClinicSettings, DayHours
from dentalcare.utils import format_time_label, from_minutes, to_minutes

logger = logging.getLogger(__name__)


def _check_durations(duration: int, buffer: int) -> None:
    if duration + buffer <= 0:
        raise ConfigurationError(
            f"Slot stride must be a positive duration, got {duration} + {buffer} minutes"
        )
    if duration <= 0:
        raise ConfigurationError(f"Appointment duration must be positive, got {duration}")
    if buffer < 0:
        raise ConfigurationError(f"Buffer time cannot be negative, got {buffer}")


def generate_slots(day_hours: DayHours, duration: int, buffer: int) -> list[time]:
    """
    Produce slot start times covering ``[start, end)`` for one day.

    Args:
        day_hours: Opening hours for the weekday.
        duration: Appointment length in minutes.
        buffer: Idle minutes between consecutive appointments.

    Returns:
        Chronologically ordered start times. Empty for a disabled day.

    Raises:
        ConfigurationError: If the stride is not positive or an enabled
            day opens at or after it closes.
    """
    _check_durations(duration, buffer)
    if not day_hours.enabled:
        return []
    if day_hours.start >= day_hours.end:
        raise ConfigurationError(
            f"Opening time {day_hours.start:%H:%M} must be before "
            f"closing time {day_hours.end:%H:%M}"
        )

    stride = duration + buffer
    end = to_minutes(day_hours.end)
    current = to_minutes(day_hours.start)
    slots: list[time] = []
    while current + duration <= end:
        slots.append(from_minutes(current))
        current += stride
    return slots


def slots_for_date(clinic: ClinicSettings, day: date) -> list[time]:
    """Slot start times for a calendar date using that weekday's hours."""
    slots = generate_slots(
        clinic.hours_for(day), clinic.appointment_duration, clinic.buffer_time
    )
    logger.debug("Generated %d slots for %s", len(slots), day.isoformat())
    return slots


def slot_id(value: time) -> str:
    return f"slot-{value:%H%M}"


def build_slot_templates(
    times: Iterable[time], unavailable: Iterable[time] = ()
) -> list[SlotTemplate]:
    """Wrap start times as SlotTemplate records, marking ``unavailable`` ones."""
    blocked = set(unavailable)
    return [
        SlotTemplate(
            id=slot_id(t),
            time=t,
            label=format_time_label(t),
            available=t not in blocked,
        )
        for t in times
    ]
