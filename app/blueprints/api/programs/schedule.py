"""
Schedule Views
==============

Read-only endpoints over the program schedule. Only active programs appear.
"""

from __future__ import annotations

import logging

from flask import request

from app.blueprints.api._common import get_schedule_service as _service
from app.blueprints.api._common import parse_at
from app.blueprints.api._common import success as _success
from app.utils.http import safe_route

from . import programs_api

logger = logging.getLogger("programs_api.schedule")


def _serialize(programs):
    return [program.to_dict() for program in programs]


@programs_api.get("/schedule/day/<day>")
@safe_route("Failed to get schedule for day")
def get_day_schedule(day: str):
    """
    Programs airing on one day, ordered by start time.

    Path params:
        day: Weekday name ("monday") or number (Sunday=0)
    Query params:
        station_id: Restrict to one station (optional)
    """
    service = _service()
    day_number = service.resolve_day(day)
    programs = service.get_schedule(day_number, station_id=request.args.get("station_id"))
    return _success({"day": day_number, "programs": _serialize(programs), "count": len(programs)})


@programs_api.get("/schedule/now")
@safe_route("Failed to get on-air programs")
def get_on_air():
    """
    Programs on air now, or at ``?at=<ISO 8601>``.

    Naive ``at`` values are read in the operating timezone.
    """
    programs = _service().find_currently_airing(
        parse_at(request.args.get("at")),
        station_id=request.args.get("station_id"),
    )
    return _success({"programs": _serialize(programs), "count": len(programs)})


@programs_api.get("/schedule/weekly")
@safe_route("Failed to get weekly schedule")
def get_weekly_schedule():
    """
    Weekly schedule.

    Query params:
        station_id: Restrict to one station (optional)
        grouped: "true" returns a day-indexed object instead of a flat list
    """
    service = _service()
    programs = service.get_weekly_schedule(station_id=request.args.get("station_id"))
    if request.args.get("grouped", "false").lower() in {"1", "true", "yes"}:
        week = service.group_by_day(programs)
        return _success({str(day): _serialize(day_programs) for day, day_programs in week.items()})
    return _success({"programs": _serialize(programs), "count": len(programs)})


@programs_api.get("/stations/<station_id>/schedule")
@safe_route("Failed to get station schedule")
def get_station_schedule(station_id: str):
    programs = _service().get_station_schedule(station_id)
    return _success({"station_id": station_id, "programs": _serialize(programs), "count": len(programs)})


@programs_api.get("/schedule/conflicts")
@safe_route("Failed to detect schedule conflicts")
def get_conflicts():
    """Overlapping program pairs, optionally for one station."""
    conflicts = _service().find_conflicts(station_id=request.args.get("station_id"))
    payload = [
        {
            "program_a": conflict.program_a.to_dict(),
            "program_b": conflict.program_b.to_dict(),
            "shared_days": conflict.shared_days,
        }
        for conflict in conflicts
    ]
    return _success({"conflicts": payload, "count": len(payload)})
