"""
Enums Module
============

This module provides enumeration types for the scheduling backend.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.schedule import Weekday

__all__ = [
    "Weekday",
]
