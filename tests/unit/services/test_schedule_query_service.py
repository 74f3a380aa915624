"""
Schedule Query Service Tests
============================
Read-side schedule queries against an in-memory database.
"""

from unittest.mock import MagicMock

import pytest

from app.domain.exceptions import InvalidDay, InvalidTimeFormat, ValidationError
from app.domain.programs import Program
from app.domain.schedules import BroadcastInstant
from app.services.application.schedule_query_service import ScheduleQueryService


@pytest.fixture
def lineup(make_program):
    """A small two-station week."""
    return {
        "breakfast": make_program("Breakfast", days=[1, 2, 3, 4, 5], start_time="06:00", end_time="09:00"),
        "news": make_program("Midday News", days=[1, 3], start_time="12:00", end_time="12:30",
                             description="Headlines and weather"),
        "late": make_program("Late Jazz", days=[5], start_time="23:00", end_time="01:00"),
        "weekend": make_program("Weekend Mix", days=[0, 6], start_time="10:00", end_time="14:00"),
        "other": make_program("Other Station Breakfast", days=[1], start_time="07:00", end_time="08:00",
                              station_id="station-2"),
        "retired": make_program("Retired Show", days=[1], start_time="08:00", end_time="08:30", is_active=False),
    }


def _names(programs):
    return [p.name for p in programs]


class TestResolveDay:
    def test_name_and_number(self, schedule_service):
        assert schedule_service.resolve_day("monday") == schedule_service.resolve_day(1) == 1

    def test_unknown_name(self, schedule_service):
        with pytest.raises(InvalidDay):
            schedule_service.resolve_day("funday")


class TestGetSchedule:
    def test_monday_sorted_by_start(self, schedule_service, lineup):
        assert _names(schedule_service.get_schedule("monday")) == [
            "Breakfast",
            "Other Station Breakfast",
            "Midday News",
        ]

    def test_inactive_excluded(self, schedule_service, lineup):
        assert "Retired Show" not in _names(schedule_service.get_schedule(1))

    def test_station_filter(self, schedule_service, lineup):
        assert _names(schedule_service.get_schedule(1, station_id="station-2")) == ["Other Station Breakfast"]

    def test_empty_day(self, make_program, schedule_service):
        make_program("Weekday Only", days=[1])
        assert schedule_service.get_schedule("sunday") == []

    def test_invalid_day(self, schedule_service):
        with pytest.raises(InvalidDay):
            schedule_service.get_schedule("someday")

    def test_sorted_by_minutes_not_text(self):
        # Stored text "9:30" would sort after "10:00" as a string
        repo = MagicMock()
        repo.list_programs.return_value = [
            Program(program_id=1, name="Ten", days=[1], start_time="10:00", end_time="11:00"),
            Program(program_id=2, name="Half Nine", days=[1], start_time="9:30", end_time="10:00"),
        ]
        service = ScheduleQueryService(repo)
        assert _names(service.get_schedule(1)) == ["Half Nine", "Ten"]
        repo.list_programs.assert_called_once_with(active_only=True, station_id=None)

    def test_malformed_rows_skipped(self):
        repo = MagicMock()
        repo.list_programs.return_value = [
            Program(program_id=1, name="Good", days=[1], start_time="10:00", end_time="11:00"),
            Program(program_id=2, name="Bad", days=[], start_time="10:00", end_time="11:00"),
        ]
        assert _names(ScheduleQueryService(repo).get_schedule(1)) == ["Good"]


class TestWeeklySchedule:
    def test_flat_order_by_first_day_then_start(self, schedule_service, lineup):
        assert _names(schedule_service.get_weekly_schedule()) == [
            "Weekend Mix",
            "Breakfast",
            "Other Station Breakfast",
            "Midday News",
            "Late Jazz",
        ]

    def test_group_by_day(self, schedule_service, lineup):
        week = schedule_service.group_by_day(schedule_service.get_weekly_schedule(station_id="station-1"))
        assert sorted(week) == list(range(7))
        assert _names(week[0]) == ["Weekend Mix"]
        assert _names(week[3]) == ["Breakfast", "Midday News"]
        assert _names(week[5]) == ["Breakfast", "Late Jazz"]
        assert _names(week[6]) == ["Weekend Mix"]

    def test_station_schedule(self, schedule_service, lineup):
        assert _names(schedule_service.get_station_schedule("station-2")) == ["Other Station Breakfast"]

    def test_station_schedule_requires_id(self, schedule_service):
        with pytest.raises(ValidationError):
            schedule_service.get_station_schedule("")


class TestCurrentlyAiring:
    def test_monday_morning(self, schedule_service, lineup):
        airing = schedule_service.find_currently_airing(BroadcastInstant(1, 7 * 60 + 30))
        assert _names(airing) == ["Breakfast", "Other Station Breakfast"]

    def test_end_boundary_inclusive(self, schedule_service, lineup):
        assert _names(schedule_service.find_currently_airing(BroadcastInstant(1, 9 * 60))) == ["Breakfast"]

    def test_overnight(self, schedule_service, lineup):
        assert _names(schedule_service.find_currently_airing(BroadcastInstant(5, 30))) == ["Late Jazz"]

    def test_station_filter(self, schedule_service, lineup):
        airing = schedule_service.find_currently_airing(BroadcastInstant(1, 450), station_id="station-2")
        assert _names(airing) == ["Other Station Breakfast"]

    def test_nothing_on_air(self, schedule_service, lineup):
        assert schedule_service.find_currently_airing(BroadcastInstant(2, 20 * 60)) == []


class TestLookups:
    def test_find_by_time_range(self, schedule_service, lineup):
        names = _names(schedule_service.find_by_time_range("08:30", "12:15"))
        assert names == ["Breakfast", "Weekend Mix", "Midday News"]

    def test_find_by_time_range_enclosing_slot(self, schedule_service, lineup):
        assert _names(schedule_service.find_by_time_range("11:00", "11:30")) == ["Weekend Mix"]

    def test_find_by_time_range_invalid(self, schedule_service):
        with pytest.raises(InvalidTimeFormat):
            schedule_service.find_by_time_range("8am", "10:00")

    def test_search_name_and_description(self, schedule_service, lineup):
        assert _names(schedule_service.search("JAZZ")) == ["Late Jazz"]
        assert _names(schedule_service.search("weather")) == ["Midday News"]

    def test_search_skips_inactive(self, schedule_service, lineup):
        assert schedule_service.search("retired") == []

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_search_rejected(self, schedule_service, query):
        with pytest.raises(ValidationError):
            schedule_service.search(query)

    def test_overlong_search_rejected(self, program_repo):
        service = ScheduleQueryService(program_repo, max_search_length=5)
        with pytest.raises(ValidationError):
            service.search("abcdefg")


class TestStats:
    def test_stats(self, schedule_service, lineup):
        stats = schedule_service.get_program_stats()
        # 180 + 30 + 120 + 240 + 60 over five active programs
        assert stats == {"total_programs": 5, "avg_duration": 126.0}

    def test_stats_empty(self, schedule_service):
        assert schedule_service.get_program_stats() == {"total_programs": 0, "avg_duration": 0.0}


class TestConflicts:
    def test_same_station_overlap(self, make_program, schedule_service):
        a = make_program("A", days=[1], start_time="09:00", end_time="10:00")
        b = make_program("B", days=[1], start_time="09:30", end_time="10:30")
        conflicts = schedule_service.find_conflicts()
        assert len(conflicts) == 1
        assert conflicts[0].pair_key == frozenset({a.program_id, b.program_id})

    def test_different_stations(self, make_program, schedule_service):
        make_program("A", days=[1], start_time="09:00", end_time="10:00", station_id="s1")
        make_program("B", days=[1], start_time="09:30", end_time="10:30", station_id="s2")
        assert schedule_service.find_conflicts() == []

    def test_inactive_not_reported(self, make_program, schedule_service):
        make_program("A", days=[1], start_time="09:00", end_time="10:00")
        make_program("B", days=[1], start_time="09:30", end_time="10:30", is_active=False)
        assert schedule_service.find_conflicts() == []

    def test_lineup_is_clean(self, schedule_service, lineup):
        assert schedule_service.find_conflicts() == []
