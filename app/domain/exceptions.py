"""Centralized exception hierarchy for the radio scheduling backend.

All domain and service exceptions inherit from :class:`RadioCMSError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    RadioCMSError (base, maps to 500)
    ├── ValidationError            (400, bad input from caller)
    │   ├── InvalidTimeFormat      (400, "HH:MM" grammar violated)
    │   ├── InvalidDay             (400, unknown day / empty day set)
    │   └── InvalidDuration        (400, duration outside [1, 1440])
    ├── NotFoundError              (404, entity does not exist)
    ├── ConflictError              (409, duplicate / state conflict)
    │   └── ScheduleConflictError  (409, overlapping on-air slot)
    └── RepositoryError            (500, database / persistence)

Validation errors are deterministic functions of their inputs; none of them
is retryable.
"""

from __future__ import annotations


class RadioCMSError(Exception):
    """Base exception for all application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(RadioCMSError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class InvalidTimeFormat(ValidationError):
    """A time of day did not match the 24-hour ``HH:MM`` grammar."""


class InvalidDay(ValidationError):
    """Day name unrecognised, day number outside 0-6, or an empty day set."""


class InvalidDuration(ValidationError):
    """Derived slot duration falls outside 1..1440 minutes."""


class NotFoundError(RadioCMSError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


class ConflictError(RadioCMSError):
    """Operation conflicts with existing state (HTTP 409)."""

    http_status: int = 409


class ScheduleConflictError(ConflictError):
    """A program's slot overlaps another active program on the same station."""


# ── Server errors (5xx) ──────────────────────────────────────────────


class RepositoryError(RadioCMSError):
    """Database / persistence layer failure (HTTP 500)."""

    http_status: int = 500
