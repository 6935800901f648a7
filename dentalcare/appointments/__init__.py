from dentalcare.appointments.workflow import ApprovalWorkflow, StatusChange
from dentalcare.appointments.store import AppointmentStore
from dentalcare.appointments.booking import BookingResult, BookingService

__all__ = [
    "AppointmentStore",
    "ApprovalWorkflow",
    "StatusChange",
    "BookingService",
    "BookingResult",
]
