"""
Program Database Operations
===========================

Database operations for the Programs table.
Backs the ProgramRepository protocol.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.programs.program_entity import Program

if TYPE_CHECKING:
    from sqlite3 import Connection

logger = logging.getLogger(__name__)


class ProgramOperations:
    """Program-related CRUD helpers for database handlers."""

    def get_db(self) -> "Connection":
        """Get database connection. Must be implemented by mixing class."""
        raise NotImplementedError("Subclass must implement get_db()")

    # =========================================================================
    # CRUD Operations
    # =========================================================================

    def create_program(self, program: Program) -> Program | None:
        """
        Insert a new program.

        Args:
            program: Program to create (program_id should be None)

        Returns:
            Created program with assigned program_id, or None on error
        """
        db = self.get_db()
        now = datetime.now()

        try:
            cursor = db.execute(
                """
                INSERT INTO Programs (
                    name, slug, description, days, start_time, end_time,
                    duration, station_id, is_active, image_id,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    program.name,
                    program.slug,
                    program.description,
                    json.dumps(sorted(program.days)),
                    program.start_time,
                    program.end_time,
                    program.duration,
                    program.station_id,
                    program.is_active,
                    program.image_id,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            db.commit()

            program.program_id = cursor.lastrowid
            program.created_at = now
            program.updated_at = now

            logger.info("Created program %s ('%s') on station %s", program.program_id, program.name, program.station_id)
            return program

        except sqlite3.Error as e:
            logger.error("Error creating program '%s': %s", program.name, e)
            return None

    def get_program_by_id(self, program_id: int) -> Program | None:
        db = self.get_db()

        try:
            row = db.execute(
                "SELECT * FROM Programs WHERE program_id = ?",
                (program_id,),
            ).fetchone()

            if row:
                return self._row_to_program(dict(row))
            return None

        except sqlite3.Error as e:
            logger.error("Error getting program %s: %s", program_id, e)
            return None

    def get_program_by_slug(self, slug: str) -> Program | None:
        db = self.get_db()

        try:
            row = db.execute(
                "SELECT * FROM Programs WHERE slug = ?",
                (slug.lower(),),
            ).fetchone()

            if row:
                return self._row_to_program(dict(row))
            return None

        except sqlite3.Error as e:
            logger.error("Error getting program by slug '%s': %s", slug, e)
            return None

    def list_programs(self, active_only: bool = True, station_id: str | None = None) -> list[Program]:
        """
        List programs, optionally restricted to active ones and one station.

        Rows come back in start_time order; callers that need minute-accurate
        ordering sort on the parsed schedule.
        """
        db = self.get_db()

        query = "SELECT * FROM Programs WHERE 1=1"
        params: list[Any] = []
        if active_only:
            query += " AND is_active = 1"
        if station_id is not None:
            query += " AND station_id = ?"
            params.append(station_id)
        query += " ORDER BY start_time, program_id"

        try:
            rows = db.execute(query, params).fetchall()
            return [self._row_to_program(dict(row)) for row in rows]

        except sqlite3.Error as e:
            logger.error("Error listing programs (station=%s): %s", station_id, e)
            return []

    def update_program(self, program: Program) -> bool:
        """
        Update an existing program.

        Returns:
            True if a row was updated, False otherwise
        """
        db = self.get_db()
        now = datetime.now()

        try:
            cursor = db.execute(
                """
                UPDATE Programs SET
                    name = ?, slug = ?, description = ?, days = ?,
                    start_time = ?, end_time = ?, duration = ?,
                    station_id = ?, is_active = ?, image_id = ?,
                    updated_at = ?
                WHERE program_id = ?
                """,
                (
                    program.name,
                    program.slug,
                    program.description,
                    json.dumps(sorted(program.days)),
                    program.start_time,
                    program.end_time,
                    program.duration,
                    program.station_id,
                    program.is_active,
                    program.image_id,
                    now.isoformat(),
                    program.program_id,
                ),
            )
            db.commit()

            if cursor.rowcount > 0:
                program.updated_at = now
                logger.info("Updated program %s", program.program_id)
                return True
            return False

        except sqlite3.Error as e:
            logger.error("Error updating program %s: %s", program.program_id, e)
            return False

    def set_program_active(self, program_id: int, active: bool) -> bool:
        db = self.get_db()

        try:
            cursor = db.execute(
                "UPDATE Programs SET is_active = ?, updated_at = ? WHERE program_id = ?",
                (active, datetime.now().isoformat(), program_id),
            )
            db.commit()

            if cursor.rowcount > 0:
                logger.info("Program %s %s", program_id, "activated" if active else "deactivated")
                return True
            return False

        except sqlite3.Error as e:
            logger.error("Error setting program %s active=%s: %s", program_id, active, e)
            return False

    def delete_program(self, program_id: int) -> bool:
        """
        Delete a program row.

        Returns:
            True if a row was removed, False otherwise
        """
        db = self.get_db()

        try:
            cursor = db.execute("DELETE FROM Programs WHERE program_id = ?", (program_id,))
            db.commit()

            if cursor.rowcount > 0:
                logger.info("Deleted program %s", program_id)
                return True
            return False

        except sqlite3.Error as e:
            logger.error("Error deleting program %s: %s", program_id, e)
            return False

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _row_to_program(self, row: dict[str, Any]) -> Program:
        """Convert database row to Program object."""
        days: list[int] = []
        if row.get("days"):
            try:
                days = [int(day) for day in json.loads(row["days"])]
            except (json.JSONDecodeError, TypeError, ValueError):
                logger.warning("Invalid days JSON for program %s: %r", row.get("program_id"), row.get("days"))

        created_at = datetime.now()
        if row.get("created_at"):
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = datetime.now()
        if row.get("updated_at"):
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return Program(
            program_id=row.get("program_id"),
            name=row.get("name", ""),
            slug=row.get("slug", ""),
            description=row.get("description"),
            days=days,
            start_time=row.get("start_time", "00:00"),
            end_time=row.get("end_time", "00:00"),
            duration=row.get("duration") or 0,
            station_id=row.get("station_id", ""),
            is_active=bool(row.get("is_active", True)),
            image_id=row.get("image_id"),
            created_at=created_at,
            updated_at=updated_at,
        )
