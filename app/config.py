"""
Configuration for the radio scheduling backend
==============================================
Runtime settings loaded from environment variables, plus the logging
setup shared by the server entry points.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_SECRET_KEY = "RadioCMSDevSecretKey"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("RADIOCMS_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("RADIOCMS_SECRET_KEY", DEFAULT_SECRET_KEY))
    database_path: str = field(default_factory=lambda: os.getenv("RADIOCMS_DATABASE_PATH", "database/radiocms.db"))

    # Operating timezone for on-air evaluation (IANA name; empty = server local time)
    timezone: str = field(default_factory=lambda: os.getenv("RADIOCMS_TIMEZONE", ""))

    # Treat start == end (zero-length) schedules as errors instead of warnings
    reject_zero_length_schedules: bool = field(
        default_factory=lambda: _env_bool("RADIOCMS_REJECT_ZERO_LENGTH", False)
    )

    # Upper bound for a search query string
    max_search_query_length: int = field(default_factory=lambda: _env_int("RADIOCMS_MAX_SEARCH_LENGTH", 200))

    DEBUG: bool = field(default_factory=lambda: _env_bool("RADIOCMS_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("RADIOCMS_LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("RADIOCMS_LOG_DIR", "logs"))
    audit_log_path: str = field(default_factory=lambda: os.getenv("RADIOCMS_AUDIT_LOG_PATH", "logs/audit.log"))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # SECURITY: Fail fast if using default secret key in production
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise RuntimeError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set RADIOCMS_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DATABASE_PATH": self.database_path,
            "AUDIT_LOG_PATH": self.audit_log_path,
            "SCHEDULE_TIMEZONE": self.timezone,
            "DEBUG": self.DEBUG,
            "JSON_SORT_KEYS": False,
        }


def validate_config(config: AppConfig) -> list[str]:
    """Return human-readable warnings for questionable settings."""
    warnings: list[str] = []

    if config.timezone:
        try:
            ZoneInfo(config.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            warnings.append(f"Unknown timezone '{config.timezone}', falling back to server local time")

    if config.log_level.upper() not in logging.getLevelNamesMapping():
        warnings.append(f"Unknown log level '{config.log_level}', using INFO")

    if config.environment == "production" and config.DEBUG:
        warnings.append("Debug mode is enabled in production")

    return warnings


def setup_logging(debug: bool = False, *, level: str = "INFO", log_dir: str | None = "logs") -> None:
    """Setup logging configuration."""
    log_level = logging.DEBUG if debug else logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "radiocms_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "radiocms_file" for h in root.handlers)
    added_handler = False

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "radiocms_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if not has_file and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "radiocms.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "radiocms_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"radiocms_console", "radiocms_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("RADIOCMS_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    config = AppConfig()

    logger = logging.getLogger("config_loader")
    for warning in validate_config(config):
        logger.warning(warning)

    return config
