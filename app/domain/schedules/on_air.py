"""
On-Air Evaluation
=================

Decides whether a schedule is airing at a given moment. The moment is
expressed as a Sunday-based weekday plus minutes since midnight in the
station's operating timezone; converting a wall clock into that form is
done by :class:`BroadcastInstant`.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.domain.exceptions import ValidationError
from app.domain.schedules.schedule_spec import ScheduleSpec
from app.domain.schedules.time_slot import MINUTES_PER_DAY, MINUTES_PER_HOUR, format_time
from app.domain.schedules.weekdays import DAYS_PER_WEEK
from app.enums.schedule import Weekday

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BroadcastInstant:
    """A point in the broadcast week: weekday (Sunday=0) and minute of day."""

    weekday: int
    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.weekday < DAYS_PER_WEEK:
            raise ValidationError(f"weekday must be between 0 and 6, got {self.weekday}")
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise ValidationError(f"minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {self.minutes}")

    @classmethod
    def from_datetime(cls, moment: datetime.datetime) -> "BroadcastInstant":
        """Read weekday and minute-of-day from a wall-clock datetime (seconds are dropped)."""
        return cls(
            weekday=int(Weekday.from_python_weekday(moment.weekday())),
            minutes=moment.hour * MINUTES_PER_HOUR + moment.minute,
        )

    @classmethod
    def now(cls, timezone: str | None = None) -> "BroadcastInstant":
        tz = resolve_timezone(timezone)
        return cls.from_datetime(datetime.datetime.now(tz) if tz else datetime.datetime.now())

    def __str__(self) -> str:
        return f"{Weekday(self.weekday).label} {format_time(self.minutes)}"


def resolve_timezone(timezone: str | None) -> ZoneInfo | None:
    """Resolve an IANA timezone name; unknown names fall back to local time."""
    if not timezone:
        return None
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s' for schedule evaluation", timezone)
        return None


def is_on_air(spec: ScheduleSpec, now: BroadcastInstant) -> bool:
    """
    Check whether a schedule is airing at the given instant.

    Both slot boundaries are inclusive: a 09:00-10:00 slot is still on air
    at exactly 10:00. Overnight slots are matched against the weekday the
    instant falls on, not the day the slot started.
    """
    if now.weekday not in spec.days:
        return False
    if not spec.overnight:
        return spec.start_minutes <= now.minutes <= spec.end_minutes
    return now.minutes >= spec.start_minutes or now.minutes <= spec.end_minutes


class OnAirEvaluator:
    """On-air checks bound to the station's operating timezone."""

    def __init__(self, timezone: str | None = None):
        self.timezone = timezone

    def instant(self, at: BroadcastInstant | datetime.datetime | None = None) -> BroadcastInstant:
        """Normalise ``at`` (instant, datetime, or None for now) to a BroadcastInstant."""
        if at is None:
            return BroadcastInstant.now(self.timezone)
        if isinstance(at, BroadcastInstant):
            return at
        if at.tzinfo is not None:
            # Without an operating zone, aware moments are read in server local time.
            at = at.astimezone(resolve_timezone(self.timezone))
        return BroadcastInstant.from_datetime(at)

    def is_on_air(self, spec: ScheduleSpec, at: BroadcastInstant | datetime.datetime | None = None) -> bool:
        return is_on_air(spec, self.instant(at))
