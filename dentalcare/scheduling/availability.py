"""
Deterministic slot availability for the calendar and booking form.

Cross-references the day's generated slots with the appointment store and
the clinic's break windows. Pending and approved appointments occupy a
slot; rejected ones do not. When a break window and an appointment claim
the same slot the slot is reported as a break.
"""

import logging
from datetime import date, time, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Optional, TypedDict

from pydantic import BaseModel, Field

from dentalcare.scheduling.slot_generator import build_slot_templates, slots_for_date
from dentalcare.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    SlotTemplate,
)
from dentalcare.schemas.settings_schema import BreakWindow
from dentalcare.utils import format_time_label, parse_time, to_minutes

if TYPE_CHECKING:
    from dentalcare.appointments.store import AppointmentStore

logger = logging.getLogger(__name__)


class SlotState(str, Enum):
    FREE = "free"
    BOOKED = "booked"
    BREAK = "break"


class SlotAvailability(BaseModel):
    """State of one generated slot."""
    time: time
    label: str
    status: SlotState
    appointment_id: Optional[str] = None


class AvailabilityReport(BaseModel):
    """Availability for one date.

    ``unscheduled`` holds occupying appointments whose time no longer
    matches any generated slot, e.g. after working hours were changed.
    ``conflicts`` holds every occupying appointment after the first one
    on the same slot; the store does not refuse double bookings.
    """
    date: date
    slots: list[SlotAvailability] = Field(default_factory=list)
    unscheduled: list[Appointment] = Field(default_factory=list)
    conflicts: list[Appointment] = Field(default_factory=list)

    @property
    def free_count(self) -> int:
        return sum(1 for s in self.slots if s.status == SlotState.FREE)


class DateAvailability(TypedDict):
    """Summary of availability for a single date."""

    date: str
    day_name: str
    free_slots: int


def _in_break(start: time, duration: int, windows: list[BreakWindow]) -> bool:
    """True if ``[start, start + duration)`` overlaps any break window."""
    slot_start = to_minutes(start)
    slot_end = slot_start + duration
    return any(
        slot_start < to_minutes(w.end) and to_minutes(w.start) < slot_end
        for w in windows
    )


class AvailabilityCalculator:
    """Computes free/booked/break slots from a store and its clinic settings."""

    def __init__(self, store: "AppointmentStore") -> None:
        self._store = store

    def compute_availability(self, day: date) -> AvailabilityReport:
        """
        Report every generated slot on ``day`` in chronological order.

        Raises:
            ConfigurationError: If the day's settings cannot generate slots.
        """
        clinic = self._store.clinic
        slot_times = slots_for_date(clinic, day)

        occupying = [
            a for a in self._store.find_by_date(day)
            if a.status != AppointmentStatus.REJECTED
        ]
        booked: dict[time, Appointment] = {}
        unscheduled: list[Appointment] = []
        conflicts: list[Appointment] = []
        slot_set = set(slot_times)
        for appointment in occupying:
            start = parse_time(appointment.time)
            if start not in slot_set:
                unscheduled.append(appointment)
            elif start in booked:
                conflicts.append(appointment)
            else:
                booked[start] = appointment

        slots = []
        for start in slot_times:
            if _in_break(start, clinic.appointment_duration, clinic.break_windows):
                status, appointment_id = SlotState.BREAK, None
            elif start in booked:
                status, appointment_id = SlotState.BOOKED, booked[start].id
            else:
                status, appointment_id = SlotState.FREE, None
            slots.append(SlotAvailability(
                time=start,
                label=format_time_label(start),
                status=status,
                appointment_id=appointment_id,
            ))

        if unscheduled:
            logger.warning(
                "%d appointment(s) on %s do not match any slot",
                len(unscheduled), day.isoformat(),
            )
        for appointment in conflicts:
            logger.warning(
                "Appointment %s shares %s on %s with %s",
                appointment.id, appointment.time, day.isoformat(),
                booked[parse_time(appointment.time)].id,
            )
        return AvailabilityReport(
            date=day, slots=slots, unscheduled=unscheduled, conflicts=conflicts
        )

    def slot_templates(self, day: date) -> list[SlotTemplate]:
        """Slots for the booking form; only free slots are available."""
        report = self.compute_availability(day)
        return build_slot_templates(
            [s.time for s in report.slots],
            unavailable=[s.time for s in report.slots if s.status != SlotState.FREE],
        )

    def is_slot_free(self, day: date, start: time) -> bool:
        report = self.compute_availability(day)
        return any(s.time == start and s.status == SlotState.FREE for s in report.slots)

    def get_available_dates(
        self, start: Optional[date] = None, limit: int = 5
    ) -> list[DateAvailability]:
        """Get the next ``limit`` bookable dates with at least one free slot."""
        results: list[DateAvailability] = []
        for day in self._bookable_days(start):
            report = self.compute_availability(day)
            if report.free_count:
                results.append({
                    "date": day.isoformat(),
                    "day_name": day.strftime("%A"),
                    "free_slots": report.free_count,
                })
            if len(results) >= limit:
                break
        return results

    def find_next_available(self, start: Optional[date] = None) -> Optional[tuple[date, str]]:
        """First free ``(date, label)`` within the booking window, or None."""
        for day in self._bookable_days(start):
            for slot in self.compute_availability(day).slots:
                if slot.status == SlotState.FREE:
                    return day, slot.label
        return None

    def _bookable_days(self, start: Optional[date]):
        today = self._store.today()
        first = max(start or today, today)
        last = today + timedelta(days=self._store.clinic.max_advance_booking)
        day = first
        while day <= last:
            yield day
            day += timedelta(days=1)
