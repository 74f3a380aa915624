import logging
import shutil
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

from infrastructure.database.ops.programs import ProgramOperations

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class SQLiteDatabaseHandler(ProgramOperations):
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path
        self._local = threading.local()

        # Ensure the directory for the database file exists
        if database_path != IN_MEMORY:
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created database directory: %s", db_path.parent)

    @property
    def database_path(self) -> str:
        return self._database_path

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        # Closing an in-memory connection drops the database with it.
        if app is not None and self._database_path != IN_MEMORY:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            try:
                connection = self._open_connection()
            except sqlite3.DatabaseError as exc:
                if self._is_corruption_error(exc):
                    logger.error("Database appears corrupt (%s). Recreating a fresh database.", exc)
                    self._quarantine_corrupt_db()
                    connection = self._open_connection()
                else:
                    raise
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._database_path, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _is_corruption_error(self, exc: sqlite3.Error) -> bool:
        message = str(exc).lower()
        return (
            "database disk image is malformed" in message
            or "file is not a database" in message
            or "file is encrypted or is not a database" in message
            or "malformed" in message
        )

    def _quarantine_corrupt_db(self) -> Optional[Path]:
        if self._database_path == IN_MEMORY:
            return None
        db_path = Path(self._database_path)
        if not db_path.exists():
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        quarantine_dir = db_path.parent / "corrupt"
        quarantine_dir.mkdir(parents=True, exist_ok=True)

        suffix = db_path.suffix or ".db"
        quarantined = quarantine_dir / f"{db_path.stem}_corrupt_{timestamp}{suffix}"
        try:
            shutil.move(str(db_path), str(quarantined))
            for sidecar_suffix in ("-wal", "-shm"):
                sidecar = Path(f"{db_path}{sidecar_suffix}")
                if sidecar.exists():
                    sidecar_target = quarantine_dir / f"{sidecar.name}_{timestamp}"
                    shutil.move(str(sidecar), str(sidecar_target))
            logger.warning("Quarantined corrupt database to %s", quarantined)
            return quarantined
        except OSError as exc:
            logger.error("Failed to quarantine corrupt database %s: %s", db_path, exc)
            return None

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Configure SQLite connection.

        - WAL mode: concurrent readers alongside the single writer
        - NORMAL synchronous: safe with WAL
        - Memory temp store: avoids temp file creation
        """
        if self._database_path != IN_MEMORY:
            connection.execute("PRAGMA journal_mode=WAL")
            connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.get_db()
        try:
            yield conn
        finally:
            conn.commit()

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        with self.connection() as db:
            db.execute(
                """
                CREATE TABLE IF NOT EXISTS Programs (
                    program_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    slug TEXT NOT NULL UNIQUE,
                    description TEXT,
                    days TEXT NOT NULL,
                    start_time TEXT NOT NULL,
                    end_time TEXT NOT NULL,
                    duration INTEGER NOT NULL,
                    station_id TEXT NOT NULL,
                    is_active BOOLEAN DEFAULT 1,
                    image_id TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            # Indexes for schedule queries
            db.execute("CREATE INDEX IF NOT EXISTS idx_programs_station ON Programs(station_id)")
            db.execute("CREATE INDEX IF NOT EXISTS idx_programs_active ON Programs(is_active)")
            db.execute(
                "CREATE INDEX IF NOT EXISTS idx_programs_station_active ON Programs(station_id, is_active)"
            )
            db.execute("CREATE INDEX IF NOT EXISTS idx_programs_start_time ON Programs(start_time)")
        logger.info("Database tables ready (%s)", self._database_path)
