"""Repository facades exposing typed accessors over low-level mixins."""

from infrastructure.database.repositories.programs import ProgramRepository

__all__ = [
    "ProgramRepository",
]
