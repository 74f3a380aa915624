"""
Schemas Module
==============

Pydantic models for request/response validation.
"""

from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.programs import ProgramCreateSchema, ProgramUpdateSchema

__all__ = [
    "ErrorResponse",
    "ProgramCreateSchema",
    "ProgramUpdateSchema",
    "SuccessResponse",
]
