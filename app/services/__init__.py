"""
Service Organization
====================
**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: ScheduleQueryService, ProgramService
"""

from .application.program_service import ProgramService
from .application.schedule_query_service import ScheduleQueryService

__all__ = ["ProgramService", "ScheduleQueryService"]
