"""
Program Repository
==================

Concrete implementation of the ProgramRepository protocol using SQLite.
Wraps the ProgramOperations mixin from the infrastructure layer.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from app.domain.programs import Program

if TYPE_CHECKING:
    from infrastructure.database.ops.programs import ProgramOperations


class ProgramRepository:
    """
    Concrete implementation of ProgramRepository protocol.

    Wraps the ProgramOperations mixin to provide repository pattern access.
    """

    def __init__(self, backend: "ProgramOperations") -> None:
        """
        Initialize with database backend.

        Args:
            backend: Database handler that implements ProgramOperations
        """
        self._backend = backend

    # ==================== CRUD Operations ====================

    def create(self, program: Program) -> Optional[Program]:
        """Create a new program."""
        return self._backend.create_program(program)

    def get_by_id(self, program_id: int) -> Optional[Program]:
        """Get program by ID."""
        return self._backend.get_program_by_id(program_id)

    def get_by_slug(self, slug: str) -> Optional[Program]:
        """Get program by slug."""
        return self._backend.get_program_by_slug(slug)

    def update(self, program: Program) -> Optional[Program]:
        """Update an existing program."""
        if self._backend.update_program(program):
            return self._backend.get_program_by_id(program.program_id)
        return None

    def set_active(self, program_id: int, active: bool) -> bool:
        """Activate or deactivate a program."""
        return self._backend.set_program_active(program_id, active)

    def delete(self, program_id: int) -> bool:
        """Permanently delete a program."""
        return self._backend.delete_program(program_id)

    # ==================== Query Operations ====================

    def list_programs(self, *, active_only: bool = True, station_id: Optional[str] = None) -> List[Program]:
        """List programs, active ones only by default."""
        return self._backend.list_programs(active_only=active_only, station_id=station_id)

