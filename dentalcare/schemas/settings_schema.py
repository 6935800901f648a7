"""Clinic working-hours and appointment settings."""

from datetime import date, time
from enum import Enum

from pydantic import BaseModel, Field

from dentalcare.config import (
    ADVANCE_BOOKING_OPTIONS,
    BUFFER_OPTIONS,
    DURATION_OPTIONS,
    settings,
)
from dentalcare.errors import ConfigurationError
from dentalcare.utils import parse_time


class Weekday(str, Enum):
    """Days of the week, ordered as ``date.weekday()`` numbers them."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


class DayHours(BaseModel):
    """Opening hours for one weekday."""
    start: time = time(9, 0)
    end: time = time(17, 0)
    enabled: bool = True


class BreakWindow(BaseModel):
    """A daily period (e.g. lunch) during which no slot is bookable."""
    start: time
    end: time
    label: str = "Break"


def _default_working_hours() -> dict[Weekday, DayHours]:
    clinic = settings.clinic
    weekday = DayHours(
        start=parse_time(clinic.weekday_start), end=parse_time(clinic.weekday_end)
    )
    hours = {
        day: weekday.model_copy()
        for day in (
            Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
            Weekday.THURSDAY, Weekday.FRIDAY,
        )
    }
    hours[Weekday.SATURDAY] = DayHours(
        start=parse_time(clinic.saturday_start), end=parse_time(clinic.saturday_end)
    )
    hours[Weekday.SUNDAY] = weekday.model_copy(update={"enabled": clinic.sunday_enabled})
    return hours


def _default_break_windows() -> list[BreakWindow]:
    appt = settings.appointments
    return [
        BreakWindow(
            start=parse_time(appt.lunch_break_start),
            end=parse_time(appt.lunch_break_end),
            label="Lunch Break",
        )
    ]


class ClinicSettings(BaseModel):
    """
    Everything the slot generator and availability calculator need.

    Defaults come from ``dentalcare.config.settings``; the dashboard's
    settings screen replaces the whole object when the doctor saves.
    """
    clinic_name: str = Field(default_factory=lambda: settings.clinic.name)
    working_hours: dict[Weekday, DayHours] = Field(default_factory=_default_working_hours)
    appointment_duration: int = Field(
        default_factory=lambda: settings.appointments.duration_minutes
    )
    buffer_time: int = Field(default_factory=lambda: settings.appointments.buffer_minutes)
    max_advance_booking: int = Field(
        default_factory=lambda: settings.appointments.max_advance_days
    )
    break_windows: list[BreakWindow] = Field(default_factory=_default_break_windows)

    def hours_for(self, day: date) -> DayHours:
        """Return the opening hours for ``day``; unknown weekdays are closed."""
        return self.working_hours.get(Weekday.for_date(day), DayHours(enabled=False))


def validate_clinic_settings(clinic: ClinicSettings) -> None:
    """Raise ConfigurationError if the settings cannot drive the scheduler."""
    if clinic.appointment_duration not in DURATION_OPTIONS:
        raise ConfigurationError(
            f"Appointment duration must be one of {DURATION_OPTIONS} minutes, "
            f"got {clinic.appointment_duration}"
        )
    if clinic.buffer_time not in BUFFER_OPTIONS:
        raise ConfigurationError(
            f"Buffer time must be one of {BUFFER_OPTIONS} minutes, got {clinic.buffer_time}"
        )
    if clinic.max_advance_booking not in ADVANCE_BOOKING_OPTIONS:
        raise ConfigurationError(
            f"Max advance booking must be one of {ADVANCE_BOOKING_OPTIONS} days, "
            f"got {clinic.max_advance_booking}"
        )
    for day, hours in clinic.working_hours.items():
        if hours.enabled and hours.start >= hours.end:
            raise ConfigurationError(
                f"{day.value.title()} starts at {hours.start:%H:%M} "
                f"but ends at {hours.end:%H:%M}"
            )
    for window in clinic.break_windows:
        if window.start >= window.end:
            raise ConfigurationError(
                f"Break '{window.label}' starts at {window.start:%H:%M} "
                f"but ends at {window.end:%H:%M}"
            )
