"""
Demo patients for the offline dashboard.

Seeds the same five sample patients the dashboard mockups show, one per
upcoming working day, through the real store and workflow so every
record obeys the slot grid and the transition rules.
"""

import logging
from datetime import timedelta
from typing import Optional

from dentalcare.appointments.store import AppointmentStore
from dentalcare.appointments.workflow import ApprovalWorkflow
from dentalcare.scheduling.availability import AvailabilityCalculator
from dentalcare.schemas.appointment_schema import Appointment, AppointmentStatus
from dentalcare.utils import parse_time, to_minutes

logger = logging.getLogger(__name__)

DEMO_PATIENTS: list[dict] = [
    {
        "patient_name": "John Doe",
        "patient_email": "john.doe@example.com",
        "patient_phone": "(555) 123-4567",
        "time": "10:00 AM",
        "notes": "Regular checkup and cleaning",
        "status": AppointmentStatus.PENDING,
    },
    {
        "patient_name": "Jane Smith",
        "patient_email": "jane.smith@example.com",
        "patient_phone": "(555) 987-6543",
        "time": "2:30 PM",
        "notes": "Tooth extraction",
        "status": AppointmentStatus.APPROVED,
    },
    {
        "patient_name": "Robert Johnson",
        "patient_email": "robert.j@example.com",
        "patient_phone": "(555) 456-7890",
        "time": "11:15 AM",
        "notes": "Root canal treatment",
        "status": AppointmentStatus.REJECTED,
    },
    {
        "patient_name": "Emily Wilson",
        "patient_email": "emily.w@example.com",
        "patient_phone": "(555) 234-5678",
        "time": "9:00 AM",
        "notes": "Dental implant consultation",
        "status": AppointmentStatus.PENDING,
    },
    {
        "patient_name": "Michael Brown",
        "patient_email": "michael.b@example.com",
        "patient_phone": "(555) 876-5432",
        "time": "3:45 PM",
        "notes": "Teeth whitening",
        "status": AppointmentStatus.APPROVED,
    },
]


def _closest_free_slot(
    calculator: AvailabilityCalculator, day, preferred: str
) -> Optional[str]:
    target = to_minutes(parse_time(preferred))
    free = [t for t in calculator.slot_templates(day) if t.available]
    if not free:
        return None
    return min(free, key=lambda t: abs(to_minutes(t.time) - target)).label


def seed_demo_appointments(
    store: AppointmentStore, workflow: ApprovalWorkflow
) -> list[Appointment]:
    """Book each demo patient on the next working day with a free slot."""
    calculator = AvailabilityCalculator(store)
    seeded: list[Appointment] = []
    day = store.today()
    last = store.today() + timedelta(days=store.clinic.max_advance_booking)

    for patient in DEMO_PATIENTS:
        label = None
        while day <= last:
            label = _closest_free_slot(calculator, day, patient["time"])
            if label:
                break
            day += timedelta(days=1)
        if label is None:
            logger.warning("No free slot left for demo patient %s", patient["patient_name"])
            break

        request = {k: v for k, v in patient.items() if k != "status"}
        appointment = store.add({**request, "date": day, "time": label})
        if patient["status"] == AppointmentStatus.APPROVED:
            workflow.approve(appointment.id)
        elif patient["status"] == AppointmentStatus.REJECTED:
            workflow.reject(appointment.id)
        seeded.append(store.get(appointment.id))
        day += timedelta(days=1)

    logger.info("Seeded %d demo appointments", len(seeded))
    return seeded
