"""
Program Repository Protocol
===========================

Defines the interface for program persistence.
The scheduling queries only need the read methods; the write methods back
the program create/update path.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from app.domain.programs.program_entity import Program


class ProgramRepository(Protocol):
    """Protocol for program persistence operations."""

    @abstractmethod
    def create(self, program: Program) -> Program:
        """
        Create a new program.

        Args:
            program: Program to create (program_id should be None)

        Returns:
            Created program with assigned program_id
        """
        ...

    @abstractmethod
    def get_by_id(self, program_id: int) -> Program | None:
        """Get program by ID, or None if it does not exist."""
        ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Program | None:
        """Get program by its unique slug, or None."""
        ...

    @abstractmethod
    def list_programs(self, *, active_only: bool = True, station_id: str | None = None) -> list[Program]:
        """
        List programs.

        Args:
            active_only: Skip programs with is_active == False
            station_id: Restrict to one station (optional)

        Returns:
            Matching programs in storage order
        """
        ...

    @abstractmethod
    def update(self, program: Program) -> Program | None:
        """
        Update an existing program.

        Args:
            program: Program with updated values (must have program_id)

        Returns:
            Updated program if found, None otherwise
        """
        ...

    @abstractmethod
    def set_active(self, program_id: int, active: bool) -> bool:
        """
        Activate or deactivate a program.

        Returns:
            True if updated, False if not found
        """
        ...

    @abstractmethod
    def delete(self, program_id: int) -> bool:
        """
        Permanently delete a program.

        Returns:
            True if deleted, False if not found
        """
        ...
