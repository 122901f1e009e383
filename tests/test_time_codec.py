"""
Tests for the HH:MM <-> day-minute codec.
"""

import pytest

from timeline.engine.time_codec import day_slots, format_duration, to_minutes, to_time_string
from timeline.errors import InvalidTimeFormat, TimelineError


class TestToMinutes:
    def test_midnight(self):
        assert to_minutes("00:00") == 0

    def test_evening(self):
        assert to_minutes("22:00") == 1320

    def test_last_minute(self):
        assert to_minutes("23:59") == 1439

    @pytest.mark.parametrize("value", ["24:00", "12:60", "99:99"])
    def test_out_of_range(self, value):
        with pytest.raises(InvalidTimeFormat):
            to_minutes(value)

    @pytest.mark.parametrize("value", ["", "9:00", "0900", "ab:cd", "09:00:00", " 09:00", "-1:30"])
    def test_malformed(self, value):
        with pytest.raises(InvalidTimeFormat):
            to_minutes(value)

    def test_non_string(self):
        with pytest.raises(InvalidTimeFormat):
            to_minutes(540)

    def test_error_is_recoverable_value_error(self):
        with pytest.raises(ValueError) as exc_info:
            to_minutes("nope")
        assert isinstance(exc_info.value, TimelineError)
        assert exc_info.value.error_code == "invalid_time_format"


class TestToTimeString:
    def test_zero_padded(self):
        assert to_time_string(65) == "01:05"

    def test_wraps_full_day(self):
        assert to_time_string(1440) == "00:00"

    def test_wraps_negative(self):
        assert to_time_string(-30) == "23:30"

    def test_fractional_minutes_floor(self):
        # Work block edges can be half minutes when commute is odd
        assert to_time_string(509.5) == "08:29"


class TestHelpers:
    def test_format_duration(self):
        assert format_duration(270) == "4h 30min"
        assert format_duration(0) == "0h 0min"

    def test_default_grid_is_48_half_hours(self):
        slots = day_slots()
        assert len(slots) == 48
        assert slots[0] == "00:00"
        assert slots[1] == "00:30"
        assert slots[-1] == "23:30"

    def test_hourly_grid(self):
        assert len(day_slots(60)) == 24

    def test_grid_must_divide_day(self):
        with pytest.raises(ValueError):
            day_slots(7)
