from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import AppConfig
from app.services.application.program_service import ProgramService
from app.services.application.schedule_query_service import ScheduleQueryService
from infrastructure.database.repositories.programs import ProgramRepository
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler
from infrastructure.logging.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    program_repo: ProgramRepository
    audit_logger: AuditLogger
    schedule_query_service: ScheduleQueryService
    program_service: ProgramService

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
        """
        logger.info("Building ServiceContainer...")

        audit_logger = AuditLogger(config.audit_log_path, config.log_level)
        database = SQLiteDatabaseHandler(config.database_path)
        database.create_tables()
        program_repo = ProgramRepository(database)

        container = cls(
            config=config,
            database=database,
            program_repo=program_repo,
            audit_logger=audit_logger,
            schedule_query_service=ScheduleQueryService(
                program_repo,
                timezone=config.timezone or None,
                max_search_length=config.max_search_query_length,
            ),
            program_service=ProgramService(
                program_repo,
                audit_logger,
                reject_zero_length=config.reject_zero_length_schedules,
            ),
        )

        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.database.close_db()
        logger.info("ServiceContainer shutdown complete.")
