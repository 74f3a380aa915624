"""
Time Slot Helpers
=================

Parsing and formatting of 24-hour ``HH:MM`` times of day as
minutes since midnight.
"""

from __future__ import annotations

import re

from app.domain.exceptions import InvalidTimeFormat

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def parse_time(text: str) -> int:
    """
    Convert an ``HH:MM`` string to minutes since midnight.

    Single-digit hours ("9:05") are accepted; minutes must always be two
    digits.

    Args:
        text: Time of day in 24-hour format

    Returns:
        Minutes since midnight in the range 0..1439

    Raises:
        InvalidTimeFormat: If text does not match the HH:MM grammar
    """
    if not isinstance(text, str):
        raise InvalidTimeFormat(
            f"Time must be a string in HH:MM format, got {type(text).__name__}",
            detail={"value": repr(text)},
        )

    match = TIME_PATTERN.match(text.strip())
    if match is None:
        raise InvalidTimeFormat(
            f"Time '{text}' must be in HH:MM format (24-hour)",
            detail={"value": text},
        )

    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours * MINUTES_PER_HOUR + minutes


def format_time(minutes: int) -> str:
    """Convert minutes since midnight back to a zero-padded ``HH:MM`` string."""
    if isinstance(minutes, bool) or not isinstance(minutes, int) or not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeFormat(
            f"Minutes since midnight must be an integer in 0..{MINUTES_PER_DAY - 1}, got {minutes!r}",
            detail={"value": repr(minutes)},
        )
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def normalize_time(text: str) -> str:
    """Return the zero-padded form of a valid ``HH:MM`` string ("9:05" -> "09:05")."""
    return format_time(parse_time(text))
