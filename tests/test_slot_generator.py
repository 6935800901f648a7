"""Tests for slot generation from working hours."""

from datetime import time

import pytest

from dentalcare.errors import ConfigurationError
from dentalcare.scheduling.slot_generator import (
    build_slot_templates,
    generate_slots,
    slots_for_date,
)
from dentalcare.schemas.settings_schema import DayHours
from dentalcare.utils import to_minutes
from tests.conftest import SUNDAY, TODAY, make_clinic

WEEKDAY = DayHours(start=time(9, 0), end=time(17, 0), enabled=True)


class TestSlotCount:
    def test_standard_day_produces_eleven_slots(self):
        slots = generate_slots(WEEKDAY, duration=30, buffer=15)
        assert len(slots) == 11

    def test_first_slot_at_opening(self):
        slots = generate_slots(WEEKDAY, duration=30, buffer=15)
        assert slots[0] == time(9, 0)

    def test_last_slot_ends_before_closing(self):
        slots = generate_slots(WEEKDAY, duration=30, buffer=15)
        assert slots[-1] == time(16, 30)
        assert to_minutes(slots[-1]) + 30 <= to_minutes(time(17, 0))

    def test_consecutive_slots_differ_by_stride(self):
        slots = generate_slots(WEEKDAY, duration=30, buffer=15)
        gaps = {to_minutes(b) - to_minutes(a) for a, b in zip(slots, slots[1:])}
        assert gaps == {45}

    def test_slot_ending_exactly_at_close_is_included(self):
        hours = DayHours(start=time(9, 0), end=time(10, 0))
        assert generate_slots(hours, duration=60, buffer=0) == [time(9, 0)]

    def test_no_buffer_hourly_slots(self):
        slots = generate_slots(WEEKDAY, duration=60, buffer=0)
        assert len(slots) == 8
        assert slots[-1] == time(16, 0)

    def test_window_shorter_than_duration_yields_nothing(self):
        hours = DayHours(start=time(9, 0), end=time(9, 20))
        assert generate_slots(hours, duration=30, buffer=0) == []

    def test_saturday_hours(self):
        hours = DayHours(start=time(9, 0), end=time(14, 0))
        slots = generate_slots(hours, duration=30, buffer=15)
        assert len(slots) == 7
        assert slots[-1] == time(13, 30)


class TestDisabledDay:
    def test_disabled_day_has_no_slots(self):
        hours = WEEKDAY.model_copy(update={"enabled": False})
        assert generate_slots(hours, duration=30, buffer=15) == []

    def test_disabled_day_ignores_inverted_hours(self):
        hours = DayHours(start=time(17, 0), end=time(9, 0), enabled=False)
        assert generate_slots(hours, duration=30, buffer=15) == []


class TestConfigurationErrors:
    def test_zero_stride_rejected(self):
        with pytest.raises(ConfigurationError, match="positive"):
            generate_slots(WEEKDAY, duration=0, buffer=0)

    def test_negative_stride_rejected(self):
        with pytest.raises(ConfigurationError):
            generate_slots(WEEKDAY, duration=15, buffer=-30)

    def test_zero_duration_rejected(self):
        with pytest.raises(ConfigurationError, match="duration"):
            generate_slots(WEEKDAY, duration=0, buffer=15)

    def test_negative_buffer_rejected(self):
        with pytest.raises(ConfigurationError, match="Buffer"):
            generate_slots(WEEKDAY, duration=30, buffer=-5)

    def test_start_equal_to_end_rejected(self):
        hours = DayHours(start=time(9, 0), end=time(9, 0))
        with pytest.raises(ConfigurationError, match="before"):
            generate_slots(hours, duration=30, buffer=15)

    def test_start_after_end_rejected(self):
        hours = DayHours(start=time(17, 0), end=time(9, 0))
        with pytest.raises(ConfigurationError):
            generate_slots(hours, duration=30, buffer=15)


class TestSlotsForDate:
    def test_uses_weekday_hours(self):
        slots = slots_for_date(make_clinic(), TODAY)
        assert len(slots) == 11

    def test_sunday_closed_by_default(self):
        assert slots_for_date(make_clinic(), SUNDAY) == []

    def test_follows_clinic_duration(self):
        slots = slots_for_date(make_clinic(appointment_duration=60, buffer_time=0), TODAY)
        assert len(slots) == 8


class TestSlotTemplates:
    def test_ids_and_labels(self):
        templates = build_slot_templates([time(9, 0), time(14, 15)])
        assert [t.id for t in templates] == ["slot-0900", "slot-1415"]
        assert [t.label for t in templates] == ["9:00 AM", "2:15 PM"]

    def test_unavailable_marked(self):
        templates = build_slot_templates(
            [time(9, 0), time(9, 45)], unavailable=[time(9, 45)]
        )
        assert [t.available for t in templates] == [True, False]
