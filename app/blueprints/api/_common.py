"""
Blueprint Common Utilities
==========================

Shared helper functions for the API blueprints.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, get_actor, parse_at, success,
        get_schedule_service, get_program_service,
    )
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask import current_app, request

from app.domain.exceptions import ValidationError
from app.utils.http import success_response
from app.utils.time import coerce_datetime

logger = logging.getLogger("api._common")

# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_schedule_service():
    return get_container().schedule_query_service


def get_program_service():
    return get_container().program_service


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def get_json() -> dict:
    """Get JSON request body, or an empty dict if not available."""
    return request.get_json(silent=True) or {}


def get_actor() -> str:
    """Actor recorded in audit entries for write requests."""
    return request.headers.get("X-Actor", "api")


def parse_at(param: Optional[str]) -> Optional[datetime]:
    """
    Parse the optional ``at`` query parameter (ISO 8601).

    Raises:
        ValidationError: If param is present but not ISO 8601
    """
    if not param:
        return None
    parsed = coerce_datetime(param)
    if parsed is None:
        raise ValidationError(f"Invalid datetime format: {param}. Expected ISO 8601.")
    return parsed


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """Flask Response with format: {"ok": true, "data": ..., "error": null}"""
    return success_response(data, status, message=message)
