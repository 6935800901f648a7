"""Shared test fixtures and helpers."""

from datetime import date, time, timedelta
from typing import Optional

import pytest

from dentalcare.appointments.booking import BookingService
from dentalcare.appointments.store import AppointmentStore
from dentalcare.appointments.workflow import ApprovalWorkflow
from dentalcare.dashboard.calendar_view import CalendarView
from dentalcare.dashboard.stats import StatsCalculator
from dentalcare.scheduling.availability import AvailabilityCalculator
from dentalcare.schemas.appointment_schema import AppointmentRequest
from dentalcare.schemas.settings_schema import (
    BreakWindow,
    ClinicSettings,
    DayHours,
    Weekday,
)

# A Monday
TODAY = date(2025, 3, 17)
TUESDAY = TODAY + timedelta(days=1)
WEDNESDAY = TODAY + timedelta(days=2)
SUNDAY = TODAY + timedelta(days=6)


def make_clinic(**overrides) -> ClinicSettings:
    """Clinic settings matching the dashboard defaults, independent of env vars."""
    weekday = DayHours(start=time(9, 0), end=time(17, 0), enabled=True)
    working_hours = {
        day: weekday.model_copy()
        for day in (
            Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
            Weekday.THURSDAY, Weekday.FRIDAY,
        )
    }
    working_hours[Weekday.SATURDAY] = DayHours(start=time(9, 0), end=time(14, 0))
    working_hours[Weekday.SUNDAY] = weekday.model_copy(update={"enabled": False})
    values = {
        "clinic_name": "Test Dental",
        "working_hours": working_hours,
        "appointment_duration": 30,
        "buffer_time": 15,
        "max_advance_booking": 30,
        "break_windows": [BreakWindow(start=time(12, 0), end=time(13, 0), label="Lunch Break")],
    }
    values.update(overrides)
    return ClinicSettings(**values)


def make_request(
    patient_name: str = "John Doe",
    day: Optional[date] = TODAY,
    slot: str = "9:00 AM",
    **overrides,
) -> AppointmentRequest:
    """Helper to create a booking request with sensible defaults."""
    values = {
        "patient_name": patient_name,
        "patient_email": "john.doe@example.com",
        "patient_phone": "(555) 123-4567",
        "date": day,
        "time": slot,
        "notes": "Regular checkup and cleaning",
    }
    values.update(overrides)
    return AppointmentRequest(**values)


@pytest.fixture
def clinic():
    return make_clinic()


@pytest.fixture
def store(clinic):
    return AppointmentStore(clinic, today=lambda: TODAY)


@pytest.fixture
def workflow(store):
    return ApprovalWorkflow(store)


@pytest.fixture
def calculator(store):
    return AvailabilityCalculator(store)


@pytest.fixture
def booking(store, calculator):
    return BookingService(store, calculator)


@pytest.fixture
def calendar_view(store, workflow):
    return CalendarView(store, workflow)


@pytest.fixture
def stats_calculator(store, workflow):
    return StatsCalculator(store, workflow, upcoming_limit=3, recent_limit=2)
