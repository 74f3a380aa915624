"""
Schedule-related Enumerations
=============================

Weekday numbering used by program schedules (Sunday=0 ... Saturday=6).
"""

from enum import IntEnum


class Weekday(IntEnum):
    """Days of the broadcast week, Sunday first."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_python_weekday(cls, value: int) -> "Weekday":
        """Map ``datetime.weekday()`` (Monday=0) onto the Sunday-first numbering."""
        return cls((value + 1) % 7)

    def __str__(self):
        return self.label
