"""
Program Schemas
===============

Pydantic models for program request validation.

Duration is never accepted from callers; it is derived from the slot.
Time and day fields are normalized with the same rules the domain uses, so a
request that passes validation always yields a valid ScheduleSpec.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.exceptions import ValidationError as DomainValidationError
from app.domain.schedules import DaySet, normalize_time, resolve_day


def _normalize_days(value):
    if value is None:
        return value
    if isinstance(value, (str, int)):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        raise ValueError(f"Day array must be a list of day names or numbers (0-6), got {type(value).__name__}")
    try:
        return DaySet.from_iterable(resolve_day(day) for day in value).to_list()
    except DomainValidationError as e:
        raise ValueError(str(e)) from None


def _normalize_time(value):
    if value is None:
        return value
    try:
        return normalize_time(value)
    except DomainValidationError as e:
        raise ValueError(str(e)) from None


class ProgramCreateSchema(BaseModel):
    """Schema for creating a new program."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200, description="Program name")
    slug: Optional[str] = Field(
        default=None,
        max_length=200,
        description="URL-safe identifier (derived from name when omitted)",
    )
    description: Optional[str] = Field(default=None, max_length=1000, description="Free-text description")
    days: List[Union[int, str]] = Field(..., min_length=1, description="Air days (names or 0-6, Sunday=0)")
    start_time: str = Field(..., description="Start time HH:MM")
    end_time: str = Field(..., description="End time HH:MM")
    station_id: str = Field(..., min_length=1, max_length=100, description="Owning station")
    is_active: bool = Field(default=True, description="Whether the program appears in schedules")
    image_id: Optional[str] = Field(default=None, max_length=200, description="Media reference")

    @field_validator("days", mode="before")
    @classmethod
    def validate_days(cls, v):
        return _normalize_days(v)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return _normalize_time(v)

    @field_validator("station_id", mode="before")
    @classmethod
    def coerce_station(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProgramUpdateSchema(BaseModel):
    """Schema for partially updating a program. Omitted fields keep their value."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    days: Optional[List[Union[int, str]]] = Field(default=None, min_length=1)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    station_id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_active: Optional[bool] = None
    image_id: Optional[str] = Field(default=None, max_length=200)

    @field_validator("days", mode="before")
    @classmethod
    def validate_days(cls, v):
        return _normalize_days(v)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return _normalize_time(v)

    @field_validator("station_id", mode="before")
    @classmethod
    def coerce_station(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def changes(self) -> dict:
        """Fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)
