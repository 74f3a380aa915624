"""
Schedule Spec Tests
===================
Tests for ScheduleSpec validation and derived duration.
"""

import pytest

from app.domain.exceptions import InvalidDay, InvalidDuration, InvalidTimeFormat
from app.domain.schedules import DaySet, ScheduleSpec, format_duration
from app.domain.schedules.schedule_spec import compute_duration
from app.domain.schedules.time_slot import parse_time


class TestDuration:
    def test_daytime_slot(self):
        spec = ScheduleSpec.create([1], "09:00", "10:00")
        assert spec.duration == 60
        assert not spec.overnight

    def test_overnight_slot(self):
        spec = ScheduleSpec.create([5], "23:30", "00:30")
        assert spec.duration == 60
        assert spec.overnight

    def test_start_equals_end_is_zero_length(self):
        spec = ScheduleSpec.create([1], "08:00", "08:00")
        assert spec.duration == 0
        assert spec.is_zero_length
        assert not spec.overnight

    def test_duration_always_in_range(self):
        for start in range(0, 1440, 97):
            for end in range(0, 1440, 89):
                assert 0 <= compute_duration(start, end) < 1440

    def test_overnight_iff_start_after_end(self):
        for start in range(0, 1440, 53):
            for end in range(0, 1440, 47):
                spec = ScheduleSpec(DaySet.from_iterable([1]), start, end)
                assert spec.overnight == (start > end)
                assert spec.overnight == (parse_time(spec.start_time) > parse_time(spec.end_time))

    def test_longest_slot(self):
        spec = ScheduleSpec.create([0], "00:00", "23:59")
        assert spec.duration == 1439


class TestValidateDuration:
    def test_valid_slot_passes(self):
        ScheduleSpec.create([1], "09:00", "10:00").validate_duration()

    def test_zero_length_rejected(self):
        spec = ScheduleSpec.create([1], "08:00", "08:00")
        with pytest.raises(InvalidDuration) as exc_info:
            spec.validate_duration()
        assert exc_info.value.detail["duration"] == 0


class TestCreate:
    def test_normalizes_times(self):
        spec = ScheduleSpec.create([2], "9:05", "10:00")
        assert spec.start_time == "09:05"
        assert spec.start_minutes == 545

    def test_accepts_day_set(self):
        spec = ScheduleSpec.create(DaySet.from_iterable([0, 6]), "10:00", "11:00")
        assert spec.days.to_list() == [0, 6]

    def test_empty_days_rejected(self):
        with pytest.raises(InvalidDay):
            ScheduleSpec.create([], "09:00", "10:00")

    def test_bad_time_rejected(self):
        with pytest.raises(InvalidTimeFormat):
            ScheduleSpec.create([1], "9am", "10:00")

    def test_out_of_range_minutes_rejected(self):
        with pytest.raises(InvalidTimeFormat):
            ScheduleSpec(DaySet.every_day(), 0, 1440)

    def test_airs_on(self):
        spec = ScheduleSpec.create([1, 3], "09:00", "10:00")
        assert spec.airs_on(3)
        assert not spec.airs_on(2)

    def test_to_dict(self):
        data = ScheduleSpec.create([1], "23:30", "00:30").to_dict()
        assert data == {
            "days": [1],
            "start_time": "23:30",
            "end_time": "00:30",
            "duration": 60,
            "overnight": True,
            "time_slot": "23:30 - 00:30",
            "formatted_duration": "1 hr",
        }


class TestFormatDuration:
    @pytest.mark.parametrize(
        "minutes,expected",
        [(0, "0 min"), (45, "45 min"), (60, "1 hr"), (90, "1 hr 30 min"), (180, "3 hr")],
    )
    def test_format(self, minutes, expected):
        assert format_duration(minutes) == expected
