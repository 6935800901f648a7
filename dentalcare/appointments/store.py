"""
In-memory appointment store for one dashboard session.

The store is an explicit instance owned by whoever composes the
application; there is no module-level registry. Records are never
deleted, and the only mutation after creation is a status change that
has passed the workflow's transition check.
"""

import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from dentalcare.appointments.workflow import StatusChange, check_transition, coerce_status
from dentalcare.errors import AppointmentNotFoundError, ValidationError
from dentalcare.logging_context import get_session_logger
from dentalcare.scheduling.slot_generator import slots_for_date
from dentalcare.schemas.appointment_schema import (
    ALL_STATUSES,
    Appointment,
    AppointmentRequest,
    AppointmentStatus,
    StatusFilter,
)
from dentalcare.schemas.settings_schema import ClinicSettings, validate_clinic_settings
from dentalcare.utils import format_time_label, parse_time

logger = get_session_logger(__name__)

REQUIRED_FIELDS = ("patient_name", "patient_email", "patient_phone", "date", "time")


class AppointmentStore:
    """
    Authoritative set of appointments for the session.

    Not thread-safe: callers serialize access, as a UI event loop does.
    Query methods return copies so records can only change via ``set_status``.
    """

    def __init__(
        self,
        clinic: Optional[ClinicSettings] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._clinic = clinic if clinic is not None else ClinicSettings()
        validate_clinic_settings(self._clinic)
        self._today = today
        self._appointments: dict[str, Appointment] = {}
        self._history: list[StatusChange] = []

    @property
    def clinic(self) -> ClinicSettings:
        return self._clinic

    def today(self) -> date:
        return self._today()

    def update_settings(self, clinic: ClinicSettings) -> None:
        """Replace the clinic settings. Existing appointments are kept as-is."""
        validate_clinic_settings(clinic)
        self._clinic = clinic
        logger.info(
            "Clinic settings updated: %d min slots, %d min buffer, %d day window",
            clinic.appointment_duration, clinic.buffer_time, clinic.max_advance_booking,
        )

    @staticmethod
    def sort_key(appointment: Appointment) -> tuple[date, time]:
        return appointment.date, parse_time(appointment.time)

    def add(self, request: Union[AppointmentRequest, dict]) -> Appointment:
        """
        Validate a booking request and insert it as a pending appointment.

        Raises:
            ValidationError: On missing or malformed fields, a past date, a
                date beyond the advance-booking window, or a time that is not
                one of that day's slots.
            ConfigurationError: If the clinic settings cannot generate slots.
        """
        request = to_request(request)

        missing = [
            name for name in REQUIRED_FIELDS
            if not _present(getattr(request, name))
        ]
        if missing:
            raise ValidationError(
                f"Cannot create appointment - missing required fields: {', '.join(missing)}."
            )

        today = self._today()
        if request.date < today:
            raise ValidationError(f"Cannot book {request.date.isoformat()}: date is in the past.")
        latest = today + timedelta(days=self._clinic.max_advance_booking)
        if request.date > latest:
            raise ValidationError(
                f"Cannot book {request.date.isoformat()}: appointments can be made at most "
                f"{self._clinic.max_advance_booking} days in advance (until {latest.isoformat()})."
            )

        try:
            slot_time = parse_time(request.time)
        except ValueError:
            raise ValidationError(f"Malformed appointment time: {request.time!r}.") from None

        slots = slots_for_date(self._clinic, request.date)
        if not slots:
            raise ValidationError(f"The clinic is closed on {request.date:%A, %B %d}.")
        if slot_time not in slots:
            raise ValidationError(
                f"{format_time_label(slot_time)} is not a bookable slot on {request.date.isoformat()}."
            )

        appointment = Appointment(
            id=self._new_id(),
            patient_name=request.patient_name.strip(),
            patient_email=request.patient_email.strip(),
            patient_phone=request.patient_phone.strip(),
            date=request.date,
            time=format_time_label(slot_time),
            notes=request.notes or None,
        )
        self._appointments[appointment.id] = appointment
        logger.info(
            "Appointment created: %s for %s on %s at %s",
            appointment.id, appointment.patient_name, appointment.date, appointment.time,
        )
        return appointment.model_copy()

    def get(self, appointment_id: str) -> Appointment:
        """Return a copy of one appointment.

        Raises:
            AppointmentNotFoundError: If the id is unknown.
        """
        return self._lookup(appointment_id).model_copy()

    def all(self) -> list[Appointment]:
        return [a.model_copy() for a in self._appointments.values()]

    def find_by_date(self, day: date) -> list[Appointment]:
        """Appointments on ``day`` in insertion order."""
        return [a.model_copy() for a in self._appointments.values() if a.date == day]

    def find_by_date_and_status(self, day: date, status: StatusFilter) -> list[Appointment]:
        """Appointments on ``day`` with ``status``; ``"all"`` matches every status."""
        if status == ALL_STATUSES:
            return self.find_by_date(day)
        wanted = coerce_status(status)
        return [a for a in self.find_by_date(day) if a.status == wanted]

    def set_status(
        self, appointment_id: str, new_status: Union[AppointmentStatus, str]
    ) -> Appointment:
        """
        Change an appointment's status in place and record the change.

        UI code should go through ``ApprovalWorkflow``, which adds the
        notification; the history is kept here either way.

        Raises:
            AppointmentNotFoundError: If the id is unknown.
            InvalidTransitionError: If the transition is not allowed. The
                record is left unchanged.
        """
        appointment = self._lookup(appointment_id)
        old_status = appointment.status
        appointment.status = check_transition(old_status, new_status)
        self._history.append(StatusChange(
            appointment_id=appointment_id,
            from_status=old_status,
            to_status=appointment.status,
            changed_at=datetime.now(timezone.utc),
        ))
        logger.info(
            "Appointment %s %s -> %s", appointment_id, old_status.value, appointment.status.value
        )
        return appointment.model_copy()

    def history(self, appointment_id: Optional[str] = None) -> list[StatusChange]:
        """Successful status changes in the order they happened."""
        if appointment_id is None:
            return list(self._history)
        return [c for c in self._history if c.appointment_id == appointment_id]

    def __len__(self) -> int:
        return len(self._appointments)

    def _lookup(self, appointment_id: str) -> Appointment:
        try:
            return self._appointments[appointment_id]
        except KeyError:
            raise AppointmentNotFoundError(f"Appointment {appointment_id} not found.") from None

    def _new_id(self) -> str:
        while True:
            candidate = f"APT-{uuid.uuid4().hex[:8].upper()}"
            if candidate not in self._appointments:
                return candidate


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def to_request(request: Union[AppointmentRequest, dict]) -> AppointmentRequest:
    """Coerce form data into an AppointmentRequest.

    Raises:
        ValidationError: If a field has the wrong type, e.g. an unparseable date.
    """
    if isinstance(request, AppointmentRequest):
        return request
    try:
        return AppointmentRequest(**request)
    except PydanticValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise ValidationError(f"Malformed appointment fields: {', '.join(fields)}.") from exc
