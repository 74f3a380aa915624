"""
Schedule Domain Module
======================

Weekly on-air scheduling for radio programs.

This module provides:
- time_slot: HH:MM parsing and formatting
- DaySet: 7-bit weekday set, plus day name/number resolution
- ScheduleSpec: validated days + start/end slot with derived duration
- is_on_air / OnAirEvaluator: live status at a broadcast instant
- find_conflicts: overlapping schedules on a shared station
"""
from app.domain.schedules.conflicts import (
    ScheduleConflict,
    conflicts_between,
    find_conflicts,
    find_conflicts_for,
    overlaps,
)
from app.domain.schedules.on_air import BroadcastInstant, OnAirEvaluator, is_on_air
from app.domain.schedules.schedule_spec import ScheduleSpec, format_duration
from app.domain.schedules.time_slot import MINUTES_PER_DAY, format_time, normalize_time, parse_time
from app.domain.schedules.weekdays import DaySet, resolve_day

__all__ = [
    "BroadcastInstant",
    "DaySet",
    "MINUTES_PER_DAY",
    "OnAirEvaluator",
    "ScheduleConflict",
    "ScheduleSpec",
    "conflicts_between",
    "find_conflicts",
    "find_conflicts_for",
    "format_duration",
    "format_time",
    "is_on_air",
    "normalize_time",
    "overlaps",
    "parse_time",
    "resolve_day",
]
