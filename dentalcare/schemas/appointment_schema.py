"""Appointment records, booking requests, and UI notification descriptors."""

import datetime as dt
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment. APPROVED and REJECTED are terminal."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ALL_STATUSES = "all"

# A status tab on the calendar: one concrete status or "all"
StatusFilter = Union[AppointmentStatus, str]


class Severity(str, Enum):
    """Toast variant the UI should use for a notification."""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class AppointmentRequest(BaseModel):
    """Booking form submission. Empty fields are reported by the store."""
    patient_name: str = ""
    patient_email: str = ""
    patient_phone: str = ""
    date: Optional[dt.date] = None
    time: str = ""
    notes: Optional[str] = None


class Appointment(BaseModel):
    """Appointment record held by the store."""
    id: str = Field(frozen=True)
    patient_name: str
    patient_email: str
    patient_phone: str
    date: dt.date
    time: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))


class Notification(BaseModel):
    """What the UI should surface after a workflow action. Rendering is up to the UI."""
    status: AppointmentStatus
    title: str
    message: str
    severity: Severity = Severity.DEFAULT


class SlotTemplate(BaseModel):
    """A bookable slot as offered by the booking form."""
    id: str
    time: dt.time
    label: str
    available: bool = True
