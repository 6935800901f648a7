"""Tests for shared utility functions."""

from datetime import time

import pytest

from dentalcare.utils import format_time_label, from_minutes, parse_time, to_minutes


class TestParseTime:
    def test_twelve_hour_label(self):
        assert parse_time("9:00 AM") == time(9, 0)

    def test_afternoon_label(self):
        assert parse_time("2:30 PM") == time(14, 30)

    def test_noon_and_midnight(self):
        assert parse_time("12:00 PM") == time(12, 0)
        assert parse_time("12:00 AM") == time(0, 0)

    def test_lowercase_without_space(self):
        assert parse_time("3:45pm") == time(15, 45)

    def test_extra_whitespace(self):
        assert parse_time("  10:30   am ") == time(10, 30)

    def test_twenty_four_hour(self):
        assert parse_time("16:30") == time(16, 30)

    @pytest.mark.parametrize("value", ["", "noon", "25:00", "9"])
    def test_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_time(value)


class TestFormatTimeLabel:
    def test_morning(self):
        assert format_time_label(time(9, 0)) == "9:00 AM"

    def test_afternoon(self):
        assert format_time_label(time(14, 15)) == "2:15 PM"

    def test_noon(self):
        assert format_time_label(time(12, 45)) == "12:45 PM"

    def test_midnight(self):
        assert format_time_label(time(0, 5)) == "12:05 AM"


class TestMinutes:
    def test_to_minutes(self):
        assert to_minutes(time(13, 30)) == 810

    def test_from_minutes(self):
        assert from_minutes(810) == time(13, 30)
