"""
Program Service
===============

Write path for radio programs.

Owns every rule that has to hold before a program is stored:
- Schedule validation (days, HH:MM times) through ScheduleSpec
- Derived duration write-back (callers never set duration)
- Slug derivation and uniqueness
- Overlap check against active programs of the same station
- Activation / deactivation and permanent deletion

All writes go through the ProgramRepository and are recorded in the audit log.
"""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING, Any

from app.domain.exceptions import (
    ConflictError,
    InvalidDuration,
    NotFoundError,
    RepositoryError,
    ScheduleConflictError,
    ValidationError,
)
from app.domain.programs import Program, slugify
from app.domain.schedules import ScheduleConflict, ScheduleSpec, find_conflicts_for, resolve_day
from app.schemas.programs import ProgramCreateSchema, ProgramUpdateSchema

if TYPE_CHECKING:
    from app.domain.programs.repository import ProgramRepository
    from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)

# Fields a partial update may change; duration and timestamps are derived.
_UPDATABLE_FIELDS = (
    "name",
    "slug",
    "description",
    "days",
    "start_time",
    "end_time",
    "station_id",
    "is_active",
    "image_id",
)
# Fields that cannot be cleared by sending null.
_REQUIRED_FIELDS = {"name", "slug", "days", "start_time", "end_time", "station_id", "is_active"}
_SLUG_SUFFIX_BYTES = 4


class ProgramService:
    """
    Create, update, (de)activate, delete and list programs.

    Args:
        repository: ProgramRepository for reads and writes
        audit_logger: Optional AuditLogger for change records
        reject_zero_length: Raise InvalidDuration for start == end slots
            instead of only logging a warning
    """

    def __init__(
        self,
        repository: "ProgramRepository",
        audit_logger: "AuditLogger" | None = None,
        *,
        reject_zero_length: bool = False,
    ):
        if repository is None:
            raise ValueError("repository is required - ProgramRepository must be provided")
        self.repository = repository
        self.audit_logger = audit_logger
        self.reject_zero_length = reject_zero_length

    # ==================== Reads ====================

    def get_program(self, program_id: int) -> Program:
        program = self.repository.get_by_id(program_id)
        if program is None:
            raise NotFoundError(f"Program {program_id} not found", detail={"program_id": program_id})
        return program

    def get_program_by_slug(self, slug: str) -> Program:
        program = self.repository.get_by_slug(slug)
        if program is None:
            raise NotFoundError(f"Program '{slug}' not found", detail={"slug": slug})
        return program

    def list_programs(
        self,
        *,
        is_active: bool | None = None,
        station_id: str | None = None,
        day: str | int | None = None,
        search: str | None = None,
    ) -> list[Program]:
        """
        Admin listing, inactive programs included unless filtered out.

        Args:
            is_active: Keep only programs in this state (None keeps both)
            station_id: Restrict to one station
            day: Weekday name or number the program must air on
            search: Case-insensitive match on name or description

        Returns:
            Programs ordered by name, then program_id

        Raises:
            InvalidDay: Unknown day
        """
        day_number = resolve_day(day) if day is not None and day != "" else None
        needle = (search or "").strip().casefold()

        programs = []
        for program in self.repository.list_programs(active_only=False, station_id=station_id):
            if is_active is not None and program.is_active != is_active:
                continue
            if day_number is not None and day_number not in program.days:
                continue
            if needle and not (
                needle in program.name.casefold() or needle in (program.description or "").casefold()
            ):
                continue
            programs.append(program)

        programs.sort(key=lambda p: (p.name.casefold(), p.program_id or 0))
        return programs

    # ==================== Writes ====================

    def create_program(self, payload: ProgramCreateSchema | dict[str, Any], *, actor: str = "system") -> Program:
        """
        Validate and store a new program.

        Raises:
            ValidationError: Invalid name, days, times or description
            ConflictError: Slug already taken
            ScheduleConflictError: Slot overlaps an active program on the same station
            RepositoryError: Storage failed
        """
        data = self._parse(ProgramCreateSchema, payload)

        program = Program(
            name=data.name,
            slug=self._resolve_slug(data.slug) if data.slug else self._generate_slug(data.name, data.station_id),
            description=data.description,
            station_id=data.station_id,
            is_active=data.is_active,
            image_id=data.image_id,
        )
        program.apply_schedule(self._validated_schedule(data.days, data.start_time, data.end_time))

        self._ensure_slug_available(program.slug)
        self._ensure_no_conflicts(program)

        created = self.repository.create(program)
        if created is None:
            raise RepositoryError(f"Failed to create program '{program.name}'")

        self._audit("create", created, actor, slot=created.time_slot, days=created.days)
        logger.info(
            "Created program %s '%s' (%s, %s min) on station %s",
            created.program_id,
            created.name,
            created.time_slot,
            created.duration,
            created.station_id,
        )
        return created

    def update_program(
        self,
        program_id: int,
        payload: ProgramUpdateSchema | dict[str, Any],
        *,
        actor: str = "system",
    ) -> Program:
        """
        Apply a partial update. Duration is recomputed from the resulting slot.

        Raises:
            NotFoundError: Program does not exist
            ValidationError / ConflictError / ScheduleConflictError: as for create
        """
        program = self.get_program(program_id)
        changes = {
            key: value
            for key, value in self._parse(ProgramUpdateSchema, payload).changes().items()
            if key in _UPDATABLE_FIELDS and not (value is None and key in _REQUIRED_FIELDS)
        }
        if not changes:
            return program

        if "slug" in changes:
            changes["slug"] = self._resolve_slug(changes["slug"])
            if changes["slug"] != program.slug:
                self._ensure_slug_available(changes["slug"], exclude_id=program.program_id)

        for key in ("name", "description", "station_id", "is_active", "image_id", "slug"):
            if key in changes:
                setattr(program, key, changes[key])

        program.apply_schedule(
            self._validated_schedule(
                changes.get("days", program.days),
                changes.get("start_time", program.start_time),
                changes.get("end_time", program.end_time),
            )
        )
        self._ensure_no_conflicts(program)

        updated = self.repository.update(program)
        if updated is None:
            raise RepositoryError(f"Failed to update program {program_id}")

        self._audit("update", updated, actor, fields=sorted(changes))
        return updated

    def set_active(self, program_id: int, active: bool, *, actor: str = "system") -> Program:
        """Move a program between the active and inactive states."""
        program = self.get_program(program_id)
        if program.is_active == active:
            return program

        if active:
            program.is_active = True
            self._ensure_no_conflicts(program)

        if not self.repository.set_active(program_id, active):
            raise RepositoryError(f"Failed to change active state of program {program_id}")

        program.is_active = active
        self._audit("activate" if active else "deactivate", program, actor)
        return program

    def toggle_active(self, program_id: int, *, actor: str = "system") -> Program:
        program = self.get_program(program_id)
        return self.set_active(program_id, not program.is_active, actor=actor)

    def delete_program(self, program_id: int, *, actor: str = "system") -> Program:
        """
        Permanently remove a program. Returns the removed record.

        Raises:
            NotFoundError: Program does not exist
            RepositoryError: Storage failed
        """
        program = self.get_program(program_id)
        if not self.repository.delete(program_id):
            raise RepositoryError(f"Failed to delete program {program_id}")

        self._audit("delete", program, actor, slug=program.slug)
        logger.info("Deleted program %s '%s' from station %s", program_id, program.name, program.station_id)
        return program

    # ==================== Helpers ====================

    @staticmethod
    def _parse(schema, payload):
        if isinstance(payload, schema):
            return payload
        try:
            return schema.model_validate(payload or {})
        except ValueError as e:
            # pydantic.ValidationError subclasses ValueError
            raise ValidationError(f"Invalid program data: {e}") from e

    @staticmethod
    def _resolve_slug(text: str) -> str:
        slug = slugify(text)
        if not slug:
            raise ValidationError("Slug must contain at least one letter or digit", detail={"value": text})
        return slug

    @staticmethod
    def _generate_slug(name: str, station_id: str) -> str:
        # Random suffix keeps automatic slugs unique across stations and renames.
        return slugify(f"{name}-{station_id}-{secrets.token_hex(_SLUG_SUFFIX_BYTES)}")

    def _validated_schedule(self, days, start_time: str, end_time: str) -> ScheduleSpec:
        spec = ScheduleSpec.create(days, start_time, end_time)
        if spec.is_zero_length:
            if self.reject_zero_length:
                spec.validate_duration()
            logger.warning(
                "Zero-length schedule %s stored with duration 0 (days=%s)",
                spec.time_slot_label,
                spec.days.to_list(),
            )
        return spec

    def _ensure_slug_available(self, slug: str, exclude_id: int | None = None) -> None:
        existing = self.repository.get_by_slug(slug)
        if existing is not None and existing.program_id != exclude_id:
            raise ConflictError(
                f"Slug '{slug}' is already used by program {existing.program_id}",
                detail={"slug": slug, "program_id": existing.program_id},
            )

    def _ensure_no_conflicts(self, program: Program) -> None:
        if not program.is_active:
            return
        existing = self.repository.list_programs(active_only=True, station_id=program.station_id)
        conflicts = find_conflicts_for(program, existing)
        if conflicts:
            raise self._conflict_error(program, conflicts)

    @staticmethod
    def _conflict_error(program: Program, conflicts: list[ScheduleConflict]) -> ScheduleConflictError:
        other = conflicts[0].program_b
        return ScheduleConflictError(
            f"Schedule {program.time_slot} overlaps program '{other.name}' ({other.time_slot}) "
            f"on station {program.station_id}",
            detail={
                "conflicts": [
                    {
                        "program_id": conflict.program_b.program_id,
                        "name": conflict.program_b.name,
                        "time_slot": conflict.program_b.time_slot,
                        "shared_days": conflict.shared_days,
                    }
                    for conflict in conflicts
                ]
            },
        )

    def _audit(self, action: str, program: Program, actor: str, **metadata: Any) -> None:
        if self.audit_logger is None:
            return
        self.audit_logger.log_program_change(
            action,
            program.program_id,
            actor=actor,
            station=program.station_id,
            **metadata,
        )
