"""
Weekday Sets
============

Program air days stored as a 7-bit mask (bit ``n`` set means weekday ``n``
airs, Sunday=0). Membership and intersection are single bit operations.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from app.domain.exceptions import InvalidDay
from app.enums.schedule import Weekday

DAYS_PER_WEEK = 7
FULL_WEEK_MASK = (1 << DAYS_PER_WEEK) - 1

DAY_NAMES: tuple[str, ...] = tuple(day.label for day in Weekday)


def _check_day_number(day: object) -> int:
    if isinstance(day, bool) or not isinstance(day, int):
        raise InvalidDay(
            f"Day values must be integers between 0-6 (Sunday=0, Saturday=6), got {day!r}",
            detail={"value": repr(day)},
        )
    if not 0 <= day < DAYS_PER_WEEK:
        raise InvalidDay(
            "Day number must be between 0-6 (Sunday=0, Saturday=6)",
            detail={"value": day},
        )
    return int(day)


def resolve_day(value: str | int) -> int:
    """
    Resolve a weekday name or number to its Sunday-based day number.

    Accepts a case-insensitive weekday name ("monday"), an integer 0-6, or a
    string of digits ("1") as used in URL path segments.

    Raises:
        InvalidDay: If the name is unknown or the number is outside 0-6
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return _check_day_number(int(text))
        try:
            return DAY_NAMES.index(text)
        except ValueError:
            raise InvalidDay(
                "Invalid day name. Use sunday, monday, tuesday, wednesday, thursday, friday, or saturday",
                detail={"value": value},
            ) from None
    return _check_day_number(value)


@dataclass(frozen=True)
class DaySet:
    """Immutable, non-empty set of weekdays."""

    mask: int

    def __post_init__(self) -> None:
        if isinstance(self.mask, bool) or not isinstance(self.mask, int):
            raise InvalidDay(f"Day mask must be an integer, got {self.mask!r}")
        if self.mask <= 0 or self.mask > FULL_WEEK_MASK:
            raise InvalidDay(
                "Day array must contain at least one day (0-6)",
                detail={"mask": self.mask},
            )

    @classmethod
    def from_iterable(cls, days: Iterable[int]) -> "DaySet":
        """Build a DaySet from day numbers; duplicates collapse."""
        if days is None or isinstance(days, (str, bytes)):
            raise InvalidDay("Day array is required and must contain at least one day (0-6)")
        mask = 0
        for day in days:
            mask |= 1 << _check_day_number(day)
        if not mask:
            raise InvalidDay("Day array is required and must contain at least one day (0-6)")
        return cls(mask)

    @classmethod
    def from_mask(cls, mask: int) -> "DaySet":
        return cls(mask)

    @classmethod
    def every_day(cls) -> "DaySet":
        return cls(FULL_WEEK_MASK)

    def __contains__(self, day: object) -> bool:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day < DAYS_PER_WEEK:
            return False
        return bool(self.mask & (1 << day))

    def __iter__(self) -> Iterator[int]:
        return (day for day in range(DAYS_PER_WEEK) if self.mask & (1 << day))

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def intersects(self, other: "DaySet") -> bool:
        return bool(self.mask & other.mask)

    def intersection(self, other: "DaySet") -> list[int]:
        """Shared days in ascending order (empty list when disjoint)."""
        shared = self.mask & other.mask
        return [day for day in range(DAYS_PER_WEEK) if shared & (1 << day)]

    @property
    def first_day(self) -> int:
        return (self.mask & -self.mask).bit_length() - 1

    def to_list(self) -> list[int]:
        return list(self)

    def __repr__(self) -> str:
        return f"DaySet({self.to_list()})"
