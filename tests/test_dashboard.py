"""Tests for the calendar view state and dashboard stats."""

from datetime import date, timedelta

import pytest

from dentalcare.dashboard.stats import StatsCalculator
from dentalcare.errors import InvalidTransitionError, ValidationError
from dentalcare.mock_data import DEMO_PATIENTS, seed_demo_appointments
from dentalcare.schemas.appointment_schema import AppointmentStatus
from tests.conftest import TODAY, TUESDAY, make_request


class TestCalendarView:
    def test_defaults_to_today_and_all_tab(self, calendar_view):
        assert calendar_view.selected_date == TODAY
        assert calendar_view.active_tab == "all"
        assert not calendar_view.dialog_open

    def test_lists_selected_date_only(self, store, calendar_view):
        store.add(make_request("Ann", TODAY))
        store.add(make_request("Ben", TUESDAY))
        assert [a.patient_name for a in calendar_view.appointments()] == ["Ann"]
        calendar_view.select_date(TUESDAY)
        assert [a.patient_name for a in calendar_view.appointments()] == ["Ben"]

    def test_tab_filters_by_status(self, store, workflow, calendar_view):
        ann = store.add(make_request("Ann"))
        store.add(make_request("Ben", slot="9:45 AM"))
        workflow.approve(ann.id)
        calendar_view.select_tab("approved")
        assert [a.patient_name for a in calendar_view.appointments()] == ["Ann"]
        calendar_view.select_tab(AppointmentStatus.PENDING)
        assert [a.patient_name for a in calendar_view.appointments()] == ["Ben"]
        calendar_view.select_tab("all")
        assert len(calendar_view.appointments()) == 2

    def test_unknown_tab_rejected(self, calendar_view):
        with pytest.raises(ValidationError):
            calendar_view.select_tab("cancelled")
        assert calendar_view.active_tab == "all"

    def test_failed_action_still_closes_dialog(self, store, workflow, calendar_view):
        appointment = store.add(make_request())
        workflow.approve(appointment.id)
        calendar_view.open_appointment(appointment.id)
        with pytest.raises(InvalidTransitionError):
            calendar_view.approve(appointment.id)
        assert not calendar_view.dialog_open

    def test_reject_from_dialog(self, store, calendar_view):
        appointment = store.add(make_request())
        calendar_view.open_appointment(appointment.id)
        notification = calendar_view.reject(appointment.id)
        assert notification.status == AppointmentStatus.REJECTED
        assert not calendar_view.dialog_open

    def test_selecting_date_closes_dialog(self, store, calendar_view):
        appointment = store.add(make_request())
        calendar_view.open_appointment(appointment.id)
        calendar_view.select_date(TUESDAY)
        assert calendar_view.selected_appointment is None

    def test_dates_with_appointments(self, store, calendar_view):
        store.add(make_request("Ann", TODAY))
        store.add(make_request("Eve", TODAY, "9:45 AM"))
        store.add(make_request("Ben", TUESDAY))
        store.add(make_request("Apr", date(2025, 4, 1)))
        assert calendar_view.dates_with_appointments(2025, 3) == {TODAY: 2, TUESDAY: 1}
        assert calendar_view.dates_with_appointments(2025, 4) == {date(2025, 4, 1): 1}


class TestStats:
    def test_empty_store(self, stats_calculator):
        stats = stats_calculator.calculate()
        assert stats.total_appointments == 0
        assert stats.approval_rate == 0.0
        assert stats.upcoming == []

    def test_counts_by_status(self, store, workflow, stats_calculator):
        a = store.add(make_request("Ann"))
        b = store.add(make_request("Ben", slot="9:45 AM"))
        c = store.add(make_request("Cat", slot="10:30 AM"))
        store.add(make_request("Dan", TUESDAY))
        workflow.approve(a.id)
        workflow.approve(b.id)
        workflow.reject(c.id)

        stats = stats_calculator.calculate()
        assert stats.total_appointments == 4
        assert stats.pending_appointments == 1
        assert stats.approved_appointments == 2
        assert stats.rejected_appointments == 1
        assert stats.appointments_today == 3
        assert stats.approval_rate == pytest.approx(2 / 3)

    def test_upcoming_sorted_limited_and_without_rejected(self, store, workflow, stats_calculator):
        store.add(make_request("Tue", TUESDAY))
        late = store.add(make_request("Late", TODAY, "4:30 PM"))
        store.add(make_request("Early", TODAY, "9:00 AM"))
        rejected = store.add(make_request("Gone", TODAY, "9:45 AM"))
        store.add(make_request("Later", TODAY + timedelta(days=2)))
        workflow.reject(rejected.id)

        upcoming = stats_calculator.calculate().upcoming
        assert [a.patient_name for a in upcoming] == ["Early", "Late", "Tue"]
        assert late.id in {a.id for a in upcoming}

    def test_recent_activity_newest_first(self, store, workflow, stats_calculator):
        ids = [store.add(make_request(slot=s)).id for s in ("9:00 AM", "9:45 AM", "10:30 AM")]
        for appointment_id in ids:
            workflow.approve(appointment_id)
        recent = stats_calculator.calculate().recent_activity
        assert [c.appointment_id for c in recent] == [ids[2], ids[1]]

    def test_zero_limits_are_respected(self, store, workflow):
        appointment = store.add(make_request())
        workflow.approve(appointment.id)
        stats = StatsCalculator(store, workflow, upcoming_limit=0, recent_limit=0).calculate()
        assert stats.upcoming == []
        assert stats.recent_activity == []

    def test_direct_store_change_shows_in_recent_activity(self, store, stats_calculator):
        appointment = store.add(make_request())
        store.set_status(appointment.id, AppointmentStatus.REJECTED)
        recent = stats_calculator.calculate().recent_activity
        assert [c.appointment_id for c in recent] == [appointment.id]


class TestDemoData:
    def test_seeds_all_patients(self, store, workflow):
        seeded = seed_demo_appointments(store, workflow)
        assert len(seeded) == len(DEMO_PATIENTS)
        assert [a.status for a in seeded] == [p["status"] for p in DEMO_PATIENTS]

    def test_one_working_day_each(self, store, workflow):
        seeded = seed_demo_appointments(store, workflow)
        assert [a.date for a in seeded] == [TODAY + timedelta(days=i) for i in range(5)]

    def test_nearest_slot_chosen(self, store, workflow):
        seeded = seed_demo_appointments(store, workflow)
        assert seeded[0].time == "9:45 AM"
        assert seeded[1].time == "2:15 PM"
        assert seeded[2].time == "11:15 AM"
