"""
Public booking flow behind the appointment request form.

Only free slots can be requested: a slot that is already held by a
pending or approved appointment, or that falls in a break window, is
refused before anything reaches the store.
"""

from dataclasses import dataclass
from typing import Union

from dentalcare.appointments.store import AppointmentStore, to_request
from dentalcare.appointments.workflow import build_notification
from dentalcare.errors import ValidationError
from dentalcare.logging_context import get_session_logger
from dentalcare.scheduling.availability import AvailabilityCalculator
from dentalcare.schemas.appointment_schema import (
    Appointment,
    AppointmentRequest,
    Notification,
)
from dentalcare.utils import format_time_label, parse_time

logger = get_session_logger(__name__)


@dataclass
class BookingResult:
    """Created appointment plus the confirmation the form should display."""
    appointment: Appointment
    notification: Notification


class BookingService:
    """Validates slot occupancy, then hands the request to the store."""

    def __init__(self, store: AppointmentStore, calculator: AvailabilityCalculator) -> None:
        self._store = store
        self._calculator = calculator

    def request_appointment(self, request: Union[AppointmentRequest, dict]) -> BookingResult:
        """
        Book a free slot as a pending appointment.

        Raises:
            ValidationError: If the request is incomplete or malformed, or the
                slot is booked or inside a break.
        """
        request = to_request(request)

        if request.date is not None and request.time.strip():
            try:
                start = parse_time(request.time)
            except ValueError:
                raise ValidationError(f"Malformed appointment time: {request.time!r}.") from None
            if not self._calculator.is_slot_free(request.date, start):
                logger.info(
                    "Slot %s on %s refused: not free", format_time_label(start), request.date
                )
                raise ValidationError(
                    f"{format_time_label(start)} on {request.date.isoformat()} is not available."
                )

        appointment = self._store.add(request)
        return BookingResult(appointment=appointment, notification=build_notification(appointment))
