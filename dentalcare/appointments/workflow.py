"""
Approval workflow for appointment status transitions.

Defines the legal transitions as an explicit table. Every status change
goes through ``check_transition``; anything not in the table is rejected
with a clear error listing what is allowed. Approving or rejecting twice
fails instead of being silently accepted.

Usage:
    workflow = ApprovalWorkflow(store)
    notification = workflow.approve(appointment.id)
    toast(notification.title, notification.message, notification.severity)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from dentalcare.errors import InvalidTransitionError, ValidationError
from dentalcare.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    Notification,
    Severity,
)

if TYPE_CHECKING:
    from dentalcare.appointments.store import AppointmentStore


@dataclass(frozen=True)
class Transition:
    """A single valid status transition."""
    from_status: AppointmentStatus
    to_status: AppointmentStatus


@dataclass(frozen=True)
class StatusChange:
    """Recorded history entry for a status transition."""
    appointment_id: str
    from_status: AppointmentStatus
    to_status: AppointmentStatus
    changed_at: datetime


TRANSITIONS: list[Transition] = [
    Transition(AppointmentStatus.PENDING, AppointmentStatus.APPROVED),
    Transition(AppointmentStatus.PENDING, AppointmentStatus.REJECTED),
]


def coerce_status(value: Union[AppointmentStatus, str]) -> AppointmentStatus:
    """Turn a raw status value into the enum, rejecting unknown values."""
    try:
        return AppointmentStatus(value)
    except ValueError:
        valid = [s.value for s in AppointmentStatus]
        raise ValidationError(f"Unknown status {value!r}. Valid statuses: {valid}") from None


def allowed_targets(current: AppointmentStatus) -> list[AppointmentStatus]:
    """Return every status reachable from ``current``."""
    return [t.to_status for t in TRANSITIONS if t.from_status == current]


def is_terminal(status: AppointmentStatus) -> bool:
    return not allowed_targets(status)


def check_transition(
    current: Union[AppointmentStatus, str], new: Union[AppointmentStatus, str]
) -> AppointmentStatus:
    """
    Validate a status change.

    Returns:
        The target status as an enum member.

    Raises:
        ValidationError: If either status is not a known value.
        InvalidTransitionError: If the table has no such transition.
    """
    current = coerce_status(current)
    new = coerce_status(new)
    if any(t.from_status == current and t.to_status == new for t in TRANSITIONS):
        return new

    valid = [s.value for s in allowed_targets(current)]
    raise InvalidTransitionError(
        f"No valid transition from '{current.value}' to '{new.value}'. "
        f"Valid targets: {valid}"
    )


def build_notification(appointment: Appointment) -> Notification:
    """Describe the toast the UI should show for an appointment's new status."""
    name = appointment.patient_name
    if appointment.status == AppointmentStatus.APPROVED:
        return Notification(
            status=appointment.status,
            title="Appointment Approved",
            message=f"{name}'s appointment has been approved.",
        )
    if appointment.status == AppointmentStatus.REJECTED:
        return Notification(
            status=appointment.status,
            title="Appointment Rejected",
            message=f"{name}'s appointment has been rejected.",
            severity=Severity.DESTRUCTIVE,
        )
    if appointment.status == AppointmentStatus.PENDING:
        return Notification(
            status=appointment.status,
            title="Appointment Requested",
            message=(
                f"Thank you, {name}! We'll confirm your appointment "
                f"on {appointment.date:%B %d, %Y} at {appointment.time} shortly via email."
            ),
        )
    raise ValidationError(f"Unhandled status {appointment.status!r}")


class ApprovalWorkflow:
    """
    Approve/reject entry point for the dashboard.

    Wraps an ``AppointmentStore`` and turns approve/reject actions into
    legality-checked transitions plus a notification descriptor for the UI.
    The transition history itself is recorded by the store.
    """

    def __init__(self, store: AppointmentStore) -> None:
        self._store = store

    def approve(self, appointment_id: str) -> Notification:
        """Approve a pending appointment.

        Raises:
            InvalidTransitionError: If the appointment is not pending.
        """
        return self._apply(appointment_id, AppointmentStatus.APPROVED)

    def reject(self, appointment_id: str) -> Notification:
        """Reject a pending appointment.

        Raises:
            InvalidTransitionError: If the appointment is not pending.
        """
        return self._apply(appointment_id, AppointmentStatus.REJECTED)

    def _apply(self, appointment_id: str, new_status: AppointmentStatus) -> Notification:
        return build_notification(self._store.set_status(appointment_id, new_status))

    def pending_queue(self) -> list[Appointment]:
        """All pending appointments, earliest first."""
        pending = [a for a in self._store.all() if a.status == AppointmentStatus.PENDING]
        return sorted(pending, key=self._store.sort_key)

    def get_history(self, appointment_id: Optional[str] = None) -> list[StatusChange]:
        """Return recorded transitions, optionally for a single appointment."""
        return self._store.history(appointment_id)
