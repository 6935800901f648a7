"""
Overview numbers for the doctor dashboard.

Everything is derived from the live store and the workflow history, so
the cards always agree with the calendar.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from dentalcare.appointments.store import AppointmentStore
from dentalcare.appointments.workflow import ApprovalWorkflow, StatusChange
from dentalcare.config import settings
from dentalcare.schemas.appointment_schema import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    """Counts and lists shown on the overview tab."""

    total_appointments: int = 0
    pending_appointments: int = 0
    approved_appointments: int = 0
    rejected_appointments: int = 0
    appointments_today: int = 0

    # Approved share of decided (approved + rejected) appointments
    approval_rate: float = 0.0

    upcoming: list[Appointment] = field(default_factory=list)
    recent_activity: list[StatusChange] = field(default_factory=list)


class StatsCalculator:
    """Builds DashboardStats from a store and its workflow."""

    def __init__(
        self,
        store: AppointmentStore,
        workflow: ApprovalWorkflow,
        upcoming_limit: Optional[int] = None,
        recent_limit: Optional[int] = None,
    ) -> None:
        self._store = store
        self._workflow = workflow
        if upcoming_limit is None:
            upcoming_limit = settings.dashboard.upcoming_limit
        if recent_limit is None:
            recent_limit = settings.dashboard.recent_activity_limit
        self._upcoming_limit = upcoming_limit
        self._recent_limit = recent_limit

    def calculate(self) -> DashboardStats:
        appointments = self._store.all()
        today = self._store.today()
        stats = DashboardStats(total_appointments=len(appointments))

        for appointment in appointments:
            if appointment.status == AppointmentStatus.PENDING:
                stats.pending_appointments += 1
            elif appointment.status == AppointmentStatus.APPROVED:
                stats.approved_appointments += 1
            elif appointment.status == AppointmentStatus.REJECTED:
                stats.rejected_appointments += 1
            if appointment.date == today:
                stats.appointments_today += 1

        decided = stats.approved_appointments + stats.rejected_appointments
        stats.approval_rate = stats.approved_appointments / decided if decided else 0.0

        upcoming = [
            a for a in appointments
            if a.date >= today and a.status != AppointmentStatus.REJECTED
        ]
        stats.upcoming = sorted(upcoming, key=self._store.sort_key)[: self._upcoming_limit]
        stats.recent_activity = list(reversed(self._workflow.get_history()))[: self._recent_limit]

        logger.debug(
            "Dashboard stats: %d total, %d pending", stats.total_appointments,
            stats.pending_appointments,
        )
        return stats
