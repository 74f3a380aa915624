"""
Program Endpoints
=================

Program lookup, admin listing, search, statistics, and create/update/activation/deletion.
"""

from __future__ import annotations

import logging

from flask import request

from app.blueprints.api._common import (
    get_actor,
    get_json,
    get_program_service as _program_service,
    get_schedule_service as _schedule_service,
    success as _success,
)
from app.domain.exceptions import ValidationError
from app.utils.http import safe_route

from . import programs_api

logger = logging.getLogger("programs_api.programs")

_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}


def _parse_is_active(value):
    if value is None or value == "":
        return None
    text = value.lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValidationError(f"Invalid is_active filter: {value}. Expected true or false.")


@programs_api.get("/programs")
@safe_route("Failed to list programs")
def list_programs():
    """
    Admin list including inactive programs.

    Query: is_active, station_id, day (name or 0-6), search.
    """
    programs = _program_service().list_programs(
        is_active=_parse_is_active(request.args.get("is_active")),
        station_id=request.args.get("station_id") or None,
        day=request.args.get("day"),
        search=request.args.get("search"),
    )
    return _success({"programs": [p.to_dict() for p in programs], "count": len(programs)})


@programs_api.get("/programs/<int:program_id>")
@safe_route("Failed to get program")
def get_program(program_id: int):
    return _success(_program_service().get_program(program_id).to_dict())


@programs_api.get("/programs/slug/<slug>")
@safe_route("Failed to get program")
def get_program_by_slug(slug: str):
    return _success(_program_service().get_program_by_slug(slug).to_dict())


@programs_api.get("/programs/search")
@safe_route("Failed to search programs")
def search_programs():
    """Search active programs by name or description (``?q=``)."""
    programs = _schedule_service().search(request.args.get("q", ""))
    return _success({"programs": [p.to_dict() for p in programs], "count": len(programs)})


@programs_api.get("/programs/by-time")
@safe_route("Failed to find programs by time range")
def find_by_time_range():
    """Programs touching ``?start=HH:MM&end=HH:MM``."""
    programs = _schedule_service().find_by_time_range(
        request.args.get("start", ""),
        request.args.get("end", ""),
    )
    return _success({"programs": [p.to_dict() for p in programs], "count": len(programs)})


@programs_api.get("/programs/stats")
@safe_route("Failed to get program statistics")
def get_program_stats():
    return _success(_schedule_service().get_program_stats())


@programs_api.post("/programs")
@safe_route("Failed to create program")
def create_program():
    """
    Create a program.

    Body: name, days, start_time, end_time, station_id, and optionally
    slug, description, is_active, image_id. Duration is derived.
    """
    program = _program_service().create_program(get_json(), actor=get_actor())
    logger.info("Program %s created via API", program.program_id)
    return _success(program.to_dict(), 201)


@programs_api.route("/programs/<int:program_id>", methods=["PUT", "PATCH"])
@safe_route("Failed to update program")
def update_program(program_id: int):
    program = _program_service().update_program(program_id, get_json(), actor=get_actor())
    return _success(program.to_dict())


@programs_api.post("/programs/<int:program_id>/toggle")
@safe_route("Failed to toggle program")
def toggle_program(program_id: int):
    program = _program_service().toggle_active(program_id, actor=get_actor())
    return _success(program.to_dict())


@programs_api.delete("/programs/<int:program_id>")
@safe_route("Failed to delete program")
def delete_program(program_id: int):
    program = _program_service().delete_program(program_id, actor=get_actor())
    return _success({"program_id": program.program_id, "slug": program.slug}, message="Program deleted")
