"""
Program Domain Entity
=====================

A recurring radio program on one station.

Supports:
- Weekly schedule (days, start/end time) with derived duration
- Enable/disable without deletion (``is_active``)
- URL-safe slug derived from the program name
- Overnight slots that cross midnight
"""

from __future__ import annotations

import datetime
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any

from app.domain.schedules.on_air import BroadcastInstant, is_on_air
from app.domain.schedules.schedule_spec import ScheduleSpec, format_duration

_SLUG_REMOVE = re.compile(r"[*+~.()'\"!:@]")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case, ASCII-only, hyphen-separated form of ``text``."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    cleaned = _SLUG_REMOVE.sub("", ascii_text.lower())
    return _SLUG_SEPARATORS.sub("-", cleaned).strip("-")


@dataclass
class Program:
    """
    Radio program entity.

    Attributes:
        program_id: Unique identifier (None for new programs)
        name: Display name
        slug: URL-safe unique identifier
        description: Optional free text (max 1000 characters)
        days: Air days, Sunday=0 ... Saturday=6
        start_time: Slot start in HH:MM format
        end_time: Slot end in HH:MM format
        duration: Derived slot length in minutes (never set by callers)
        station_id: Owning station reference
        is_active: Inactive programs drop out of every schedule query
        image_id: Optional media reference
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    # Identity
    program_id: int | None = None
    name: str = ""
    slug: str = ""
    description: str | None = None

    # Time configuration
    days: list[int] = field(default_factory=list)
    start_time: str = "00:00"
    end_time: str = "00:00"
    duration: int = 0

    # Ownership
    station_id: str = ""
    is_active: bool = True
    image_id: str | None = None

    # Metadata
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)
    updated_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    @property
    def schedule(self) -> ScheduleSpec:
        """Validated schedule for this program (raises on malformed stored data)."""
        return ScheduleSpec.create(self.days, self.start_time, self.end_time)

    def apply_schedule(self, spec: ScheduleSpec) -> None:
        """Copy a validated schedule onto the entity, deriving duration."""
        self.days = spec.days.to_list()
        self.start_time = spec.start_time
        self.end_time = spec.end_time
        self.duration = spec.duration

    def is_on_air(self, now: BroadcastInstant) -> bool:
        return is_on_air(self.schedule, now)

    @property
    def time_slot(self) -> str:
        return f"{self.start_time} - {self.end_time}"

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration)

    def to_dict(self) -> dict[str, Any]:
        """Convert program to dictionary for serialization."""
        return {
            "program_id": self.program_id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "days": list(self.days),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "station_id": self.station_id,
            "is_active": self.is_active,
            "image_id": self.image_id,
            "time_slot": self.time_slot,
            "formatted_duration": self.formatted_duration,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Program":
        """Create Program from dictionary."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.datetime.fromisoformat(created_at)
        elif created_at is None:
            created_at = datetime.datetime.now()

        updated_at = data.get("updated_at")
        if isinstance(updated_at, str):
            updated_at = datetime.datetime.fromisoformat(updated_at)
        elif updated_at is None:
            updated_at = datetime.datetime.now()

        return Program(
            program_id=data.get("program_id"),
            name=data.get("name", ""),
            slug=data.get("slug", ""),
            description=data.get("description"),
            days=list(data.get("days") or []),
            start_time=data.get("start_time", "00:00"),
            end_time=data.get("end_time", "00:00"),
            duration=data.get("duration", 0),
            station_id=str(data.get("station_id", "")),
            is_active=bool(data.get("is_active", True)),
            image_id=data.get("image_id"),
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return False
        if self.program_id and other.program_id:
            return self.program_id == other.program_id
        return (
            self.station_id == other.station_id
            and self.slug == other.slug
            and self.start_time == other.start_time
            and self.end_time == other.end_time
        )

    def __hash__(self) -> int:
        return hash((self.program_id, self.station_id, self.slug, self.start_time, self.end_time))
