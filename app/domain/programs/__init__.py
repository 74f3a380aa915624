"""
Program Domain Module
=====================

- Program: radio program entity with its weekly schedule
- ProgramRepository: Protocol for program persistence
- slugify: URL-safe identifier derivation
"""
from app.domain.programs.program_entity import Program, slugify
from app.domain.programs.repository import ProgramRepository

__all__ = [
    "Program",
    "ProgramRepository",
    "slugify",
]
