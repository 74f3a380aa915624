from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from flask import Response, jsonify

from app.utils.time import iso_now

_log = logging.getLogger(__name__)

# Server-side failures never expose internals to the client.
_GENERIC_MESSAGE = "An internal error occurred"


def safe_error(
    exc: BaseException,
    status: int = 500,
    *,
    context: str = "",
) -> Response:
    """Return a generic error response while logging the real exception.

    Parameters
    ----------
    exc:
        The caught exception. Logged server-side, never sent to the client.
    status:
        HTTP status code for the response.
    context:
        Optional context string logged alongside *exc*, e.g.
        ``"creating program"``.
    """
    _log.error("API error [%s] %s: %s", status, context, exc, exc_info=exc)
    return error_response(_GENERIC_MESSAGE, status)


def success_response(
    data: dict | list | None = None,
    status: int = 200,
    *,
    message: str | None = None,
) -> Response:
    payload: dict[str, Any] = {"ok": True, "data": data, "error": None}
    if message is not None:
        payload["message"] = message
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(
    message: str,
    status: int = 500,
    *,
    details: dict | None = None,
) -> Response:
    """Error envelope; structured *details* are merged into the error object."""
    error: dict[str, Any] = {**(details or {}), "message": message, "timestamp": iso_now()}
    response = jsonify({"ok": False, "data": None, "error": error})
    response.status_code = status
    return response


# ---------------------------------------------------------------------------
# Route decorator
# ---------------------------------------------------------------------------


def safe_route(
    error_message: str = _GENERIC_MESSAGE,
    *,
    error_status: int = 500,
) -> Callable:
    """Decorator that wraps a Flask route handler with standardized error handling.

    Catches :class:`~app.domain.exceptions.RadioCMSError` subclasses and maps
    them to the correct HTTP status via ``exc.http_status``; client errors
    carry ``exc.detail`` in the response. Any other ``Exception`` is logged
    and returns a generic 500.

    Usage::

        @programs_api.get("/schedule/now")
        @safe_route("Failed to get on-air programs")
        def get_on_air():
            ...
    """
    from app.domain.exceptions import RadioCMSError

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            try:
                return fn(*args, **kwargs)
            except RadioCMSError as exc:
                status = exc.http_status
                if status >= 500:
                    return safe_error(exc, status, context=error_message)
                return error_response(str(exc) or error_message, status, details=exc.detail or None)
            except Exception as exc:
                return safe_error(exc, error_status, context=error_message)

        return wrapper

    return decorator
