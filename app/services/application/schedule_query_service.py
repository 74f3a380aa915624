"""
Schedule Query Service
======================

Read-only schedule views over the program repository.

Features:
- Day name / number resolution
- Per-day and per-station schedules sorted by start time
- Weekly schedule assembly (flat and grouped by day)
- Currently airing programs
- Time-range lookup, text search and program statistics
- Conflict scan across active programs

Only active programs are ever returned. The service holds no state besides
the repository handle and the operating timezone, so one instance can be
shared across request threads.
"""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING

from app.domain.exceptions import ValidationError
from app.domain.programs import Program
from app.domain.schedules import (
    BroadcastInstant,
    OnAirEvaluator,
    ScheduleConflict,
    find_conflicts,
    parse_time,
    resolve_day,
)
from app.domain.schedules.weekdays import DAYS_PER_WEEK

if TYPE_CHECKING:
    from app.domain.programs.repository import ProgramRepository

logger = logging.getLogger(__name__)


def _start_key(program: Program) -> tuple[int, int]:
    return (program.schedule.start_minutes, program.program_id or 0)


def _week_key(program: Program) -> tuple[int, int, int]:
    spec = program.schedule
    return (spec.days.first_day, spec.start_minutes, program.program_id or 0)


class ScheduleQueryService:
    """
    Schedule queries for the broadcast week.

    Architecture:
    - Explicit read-only repository handle (no global model access)
    - Pure scheduling logic delegated to app.domain.schedules
    - Sorting done on parsed minutes, not on stored strings
    """

    def __init__(self, repository: "ProgramRepository", timezone: str | None = None, max_search_length: int = 200):
        """
        Initialize schedule query service.

        Args:
            repository: ProgramRepository used for reads only
            timezone: Operating timezone for "now" (IANA name)
            max_search_length: Longest accepted search query
        """
        self.repository = repository
        self.on_air = OnAirEvaluator(timezone)
        self.max_search_length = max_search_length

    def _active_programs(self, station_id: str | None = None) -> list[Program]:
        programs = self.repository.list_programs(active_only=True, station_id=station_id)
        return [program for program in programs if self._is_well_formed(program)]

    @staticmethod
    def _is_well_formed(program: Program) -> bool:
        try:
            program.schedule
        except ValidationError as e:
            logger.warning("Skipping program %s with invalid schedule: %s", program.program_id, e)
            return False
        return True

    # ==================== Day Queries ====================

    @staticmethod
    def resolve_day(value: str | int) -> int:
        """Resolve a weekday name or number (Sunday=0) or raise InvalidDay."""
        return resolve_day(value)

    def get_schedule(self, day: str | int, station_id: str | None = None) -> list[Program]:
        """
        Get the programs airing on one day, ordered by start time.

        Args:
            day: Weekday name or number (Sunday=0)
            station_id: Restrict to one station (optional)

        Raises:
            InvalidDay: If day cannot be resolved
        """
        day_number = resolve_day(day)
        programs = [p for p in self._active_programs(station_id) if p.schedule.airs_on(day_number)]
        programs.sort(key=_start_key)
        logger.debug("Schedule for day %s (station=%s): %d programs", day_number, station_id, len(programs))
        return programs

    def get_weekly_schedule(self, station_id: str | None = None) -> list[Program]:
        """Active programs ordered by (first air day, start time)."""
        programs = self._active_programs(station_id)
        programs.sort(key=_week_key)
        return programs

    def get_station_schedule(self, station_id: str) -> list[Program]:
        """All active programs of one station, ordered by (first air day, start time)."""
        if not station_id:
            raise ValidationError("station_id is required")
        return self.get_weekly_schedule(station_id)

    @staticmethod
    def group_by_day(programs: list[Program]) -> dict[int, list[Program]]:
        """
        Expand programs into a day-indexed weekly view.

        Every weekday 0-6 is present; a program appears under each day it
        airs, and each day's list is ordered by start time.
        """
        week: dict[int, list[Program]] = {day: [] for day in range(DAYS_PER_WEEK)}
        for program in programs:
            for day in program.schedule.days:
                week[day].append(program)
        for day_programs in week.values():
            day_programs.sort(key=_start_key)
        return week

    # ==================== Live Status ====================

    def find_currently_airing(
        self,
        now: BroadcastInstant | datetime.datetime | None = None,
        station_id: str | None = None,
    ) -> list[Program]:
        """
        Programs on air at ``now`` (defaults to the current time in the
        operating timezone).
        """
        instant = self.on_air.instant(now)
        programs = [p for p in self._active_programs(station_id) if p.is_on_air(instant)]
        programs.sort(key=_start_key)
        logger.debug("Currently airing at %s: %d programs", instant, len(programs))
        return programs

    # ==================== Lookups ====================

    def find_by_time_range(self, start_time: str, end_time: str) -> list[Program]:
        """
        Programs whose start or end falls inside ``[start_time, end_time]``,
        or whose slot encloses that whole range.
        """
        range_start, range_end = parse_time(start_time), parse_time(end_time)
        matches = []
        for program in self._active_programs():
            spec = program.schedule
            starts_inside = range_start <= spec.start_minutes <= range_end
            ends_inside = range_start <= spec.end_minutes <= range_end
            encloses = spec.start_minutes <= range_start and spec.end_minutes >= range_end
            if starts_inside or ends_inside or encloses:
                matches.append(program)
        matches.sort(key=_start_key)
        return matches

    def search(self, query: str) -> list[Program]:
        """Case-insensitive substring search over name and description."""
        if not query or not query.strip():
            raise ValidationError("Search query is required")
        if len(query) > self.max_search_length:
            raise ValidationError(f"Search query cannot exceed {self.max_search_length} characters")

        needle = query.strip().casefold()
        return [
            program
            for program in self._active_programs()
            if needle in program.name.casefold() or needle in (program.description or "").casefold()
        ]

    def get_program_stats(self) -> dict[str, float | int]:
        """Count and average duration of active programs."""
        programs = self._active_programs()
        if not programs:
            return {"total_programs": 0, "avg_duration": 0.0}
        total_duration = sum(program.duration for program in programs)
        return {
            "total_programs": len(programs),
            "avg_duration": round(total_duration / len(programs), 2),
        }

    # ==================== Conflict Detection ====================

    def find_conflicts(self, station_id: str | None = None) -> list[ScheduleConflict]:
        """Overlapping pairs among active programs (optionally one station)."""
        conflicts = find_conflicts(self._active_programs(station_id), station_id=station_id)
        if conflicts:
            logger.info("Detected %d schedule conflicts (station=%s)", len(conflicts), station_id)
        return conflicts
