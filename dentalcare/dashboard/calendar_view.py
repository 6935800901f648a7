"""
View state for the doctor's appointment calendar.

Holds the selected date, the active status tab and the open detail
dialog. Approving or rejecting from the dialog goes through the approval
workflow and closes the dialog, whether or not the action succeeded.
"""

import logging
from calendar import monthrange
from datetime import date
from typing import Optional

from dentalcare.appointments.store import AppointmentStore
from dentalcare.appointments.workflow import ApprovalWorkflow, coerce_status
from dentalcare.schemas.appointment_schema import (
    ALL_STATUSES,
    Appointment,
    Notification,
    StatusFilter,
)

logger = logging.getLogger(__name__)


class CalendarView:
    """Selected date + status tab over a single store."""

    def __init__(
        self,
        store: AppointmentStore,
        workflow: ApprovalWorkflow,
        selected_date: Optional[date] = None,
    ) -> None:
        self._store = store
        self._workflow = workflow
        self.selected_date: date = selected_date or store.today()
        self.active_tab: StatusFilter = ALL_STATUSES
        self.selected_appointment: Optional[Appointment] = None

    @property
    def dialog_open(self) -> bool:
        return self.selected_appointment is not None

    def select_date(self, day: date) -> None:
        self.selected_date = day
        self.close_dialog()

    def select_tab(self, tab: StatusFilter) -> None:
        """Switch tab; raises ValidationError for an unknown status."""
        self.active_tab = ALL_STATUSES if tab == ALL_STATUSES else coerce_status(tab)

    def appointments(self) -> list[Appointment]:
        """Appointments on the selected date under the active tab."""
        return self._store.find_by_date_and_status(self.selected_date, self.active_tab)

    def open_appointment(self, appointment_id: str) -> Appointment:
        self.selected_appointment = self._store.get(appointment_id)
        return self.selected_appointment

    def close_dialog(self) -> None:
        self.selected_appointment = None

    def approve(self, appointment_id: str) -> Notification:
        try:
            return self._workflow.approve(appointment_id)
        finally:
            self.close_dialog()

    def reject(self, appointment_id: str) -> Notification:
        try:
            return self._workflow.reject(appointment_id)
        finally:
            self.close_dialog()

    def dates_with_appointments(self, year: int, month: int) -> dict[date, int]:
        """Appointment counts per day of a month, for highlighting the calendar."""
        first = date(year, month, 1)
        last = date(year, month, monthrange(year, month)[1])
        counts: dict[date, int] = {}
        for appointment in self._store.all():
            if first <= appointment.date <= last:
                counts[appointment.date] = counts.get(appointment.date, 0) + 1
        logger.debug("%d days with appointments in %04d-%02d", len(counts), year, month)
        return dict(sorted(counts.items()))
