"""
Common Schemas
==============

Shared Pydantic models describing the API response envelope.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success response format"""

    ok: bool = Field(default=True, description="Request success status")
    data: T = Field(..., description="Response data")
    error: str | None = Field(default=None, description="Error message (null on success)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "data": {"program_id": 1, "name": "Morning Show", "time_slot": "06:00 - 09:00"},
                "error": None,
            }
        }
    )


class ErrorResponse(BaseModel):
    """Standard error response format"""

    ok: bool = Field(default=False, description="Request success status")
    data: Any | None = Field(default=None, description="Data (null on error)")
    error: dict[str, Any] = Field(..., description="Error payload with message and timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": False,
                "data": None,
                "error": {"message": "Invalid day name", "timestamp": "2026-01-05T09:00:00+00:00"},
            }
        }
    )
