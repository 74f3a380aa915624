"""
Shared test fixtures for the radio scheduling test suite.

Provides:
- In-memory SQLite database with all tables created
- Program repository wired to the test database
- Service instances (schedule queries, program writes)
- Flask app and test client backed by a temporary database file
- Helper for seeding programs

Usage:
    def test_example(program_repo, make_program):
        program = make_program(name="Morning Show", days=[1], start_time="06:00", end_time="09:00")
        assert program_repo.get_by_id(program.program_id) is not None
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.domain.programs import Program, slugify  # noqa: E402
from app.domain.schedules import ScheduleSpec  # noqa: E402
from infrastructure.database.repositories.programs import ProgramRepository  # noqa: E402
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler  # noqa: E402

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler():
    """In-memory SQLite database with all tables created.

    Each test gets a fresh database, no cross-test contamination.
    """
    handler = SQLiteDatabaseHandler(":memory:")
    handler.create_tables()
    yield handler
    handler.close_db()


@pytest.fixture()
def program_repo(db_handler):
    """ProgramRepository backed by the in-memory DB."""
    return ProgramRepository(db_handler)


# ========================== Service Fixtures ===============================


@pytest.fixture()
def audit_logger():
    """Mock audit logger recording program changes."""
    return MagicMock()


@pytest.fixture()
def schedule_service(program_repo):
    from app.services.application.schedule_query_service import ScheduleQueryService

    return ScheduleQueryService(program_repo)


@pytest.fixture()
def program_service(program_repo, audit_logger):
    from app.services.application.program_service import ProgramService

    return ProgramService(program_repo, audit_logger)


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path):
    from app import create_app

    flask_app = create_app(
        {
            "database_path": str(tmp_path / "test.db"),
            "audit_log_path": str(tmp_path / "logs" / "audit.log"),
            "log_dir": None,
            "timezone": "",
        }
    )
    flask_app.config.update(TESTING=True)
    yield flask_app
    flask_app.extensions["radiocms_shutdown"]("test teardown")


@pytest.fixture()
def client(app):
    return app.test_client()


# ========================== Data Helpers ===================================


def build_program(
    name: str = "Morning Show",
    *,
    days=(1,),
    start_time: str = "09:00",
    end_time: str = "10:00",
    station_id: str = "station-1",
    is_active: bool = True,
    program_id: int | None = None,
    description: str | None = None,
) -> Program:
    """Unsaved Program with schedule-derived duration."""
    program = Program(
        program_id=program_id,
        name=name,
        slug=slugify(name),
        description=description,
        station_id=station_id,
        is_active=is_active,
    )
    program.apply_schedule(ScheduleSpec.create(list(days), start_time, end_time))
    return program


@pytest.fixture()
def new_program():
    """Factory for unsaved programs."""
    return build_program


@pytest.fixture()
def make_program(program_repo):
    """Persist a program through the repository and return it."""

    def _make(name: str = "Morning Show", **kwargs) -> Program:
        program = program_repo.create(build_program(name, **kwargs))
        assert program is not None
        return program

    return _make
