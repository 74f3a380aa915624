"""
Schedule Conflict Detection
===========================

Finds pairs of active programs on the same station that share a weekday and
whose slots overlap.

Overlap is the half-open interval test ``start_a < end_b and end_a > start_b``
applied to the raw start/end minutes. Overnight slots are not unrolled onto
a two-day ring first, so overlaps involving a slot that crosses midnight
may be missed or over-reported (see DESIGN.md, open questions).
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Protocol

from app.domain.schedules.schedule_spec import ScheduleSpec

logger = logging.getLogger(__name__)


class SchedulableProgram(Protocol):
    """What the detector needs to know about a program."""

    program_id: Hashable
    station_id: Hashable
    is_active: bool

    @property
    def schedule(self) -> ScheduleSpec: ...


@dataclass
class ScheduleConflict:
    """Two programs whose on-air slots collide."""

    program_a: SchedulableProgram
    program_b: SchedulableProgram
    shared_days: list[int] = field(default_factory=list)

    @property
    def pair_key(self) -> frozenset:
        """Order-independent identity of the pair."""
        return frozenset((self.program_a.program_id, self.program_b.program_id))

    def involves(self, program_id: Hashable) -> bool:
        return program_id in (self.program_a.program_id, self.program_b.program_id)


def overlaps(spec_a: ScheduleSpec, spec_b: ScheduleSpec) -> bool:
    """True when two slots share a weekday and their minute ranges overlap."""
    if not spec_a.days.intersects(spec_b.days):
        return False
    return spec_a.start_minutes < spec_b.end_minutes and spec_a.end_minutes > spec_b.start_minutes


def conflicts_between(
    program_a: SchedulableProgram,
    program_b: SchedulableProgram,
) -> ScheduleConflict | None:
    """Check a single pair. Programs on different stations never conflict."""
    if program_a.station_id != program_b.station_id:
        return None
    spec_a, spec_b = program_a.schedule, program_b.schedule
    if not overlaps(spec_a, spec_b):
        return None
    return ScheduleConflict(
        program_a=program_a,
        program_b=program_b,
        shared_days=spec_a.days.intersection(spec_b.days),
    )


def _scan_order(program: SchedulableProgram) -> tuple[int, str]:
    return (program.schedule.start_minutes, str(program.program_id))


def find_conflicts(
    programs: Iterable[SchedulableProgram],
    station_id: Hashable | None = None,
) -> list[ScheduleConflict]:
    """
    Scan a snapshot of programs for conflicting pairs.

    Each unordered pair is reported at most once, with the earlier-starting
    program as ``program_a``. The scan is quadratic in the number of
    candidates; callers usually pass one station's programs.

    Args:
        programs: Programs to compare; inactive ones are ignored
        station_id: Restrict the scan to one station (optional)

    Returns:
        Conflicting pairs; an empty list means no conflicts
    """
    candidates = [
        program
        for program in programs
        if program.is_active and (station_id is None or program.station_id == station_id)
    ]
    candidates.sort(key=_scan_order)

    conflicts: list[ScheduleConflict] = []
    for i, program_a in enumerate(candidates):
        for program_b in candidates[i + 1:]:
            conflict = conflicts_between(program_a, program_b)
            if conflict:
                conflicts.append(conflict)

    if conflicts:
        logger.debug("Found %d schedule conflicts among %d programs", len(conflicts), len(candidates))
    return conflicts


def find_conflicts_for(
    candidate: SchedulableProgram,
    existing: Iterable[SchedulableProgram],
) -> list[ScheduleConflict]:
    """
    Check one (new or edited) program against already scheduled programs.

    The candidate's own record is skipped so an update never conflicts with
    its previous version.
    """
    conflicts: list[ScheduleConflict] = []
    for other in existing:
        if not other.is_active:
            continue
        if candidate.program_id is not None and other.program_id == candidate.program_id:
            continue
        conflict = conflicts_between(candidate, other)
        if conflict:
            conflicts.append(conflict)
    return conflicts
