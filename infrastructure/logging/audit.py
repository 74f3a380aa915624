import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict

AUDIT_LOGGER_NAME = "radiocms.audit"


class AuditLogger:
    """Structured audit logger that writes append-only JSON records."""

    def __init__(self, log_path: str, level: str = "INFO") -> None:
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(AUDIT_LOGGER_NAME)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # One file handler per target path, even when several containers are built
        target = str(self.log_path.resolve())
        if not any(
            isinstance(handler, RotatingFileHandler) and handler.baseFilename == target
            for handler in self.logger.handlers
        ):
            handler = RotatingFileHandler(
                filename=str(self.log_path),
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=30,
                encoding="utf-8",
                delay=True,
            )
            formatter = logging.Formatter(
                fmt="%(asctime)sZ | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_event(self, actor: str, action: str, resource: str, outcome: str, **metadata: Any) -> None:
        payload: Dict[str, Any] = {
            "actor": actor,
            "action": action,
            "resource": resource,
            "outcome": outcome,
        }
        if metadata:
            payload["meta"] = metadata

        self.logger.info(json.dumps(payload, default=str))

    def log_program_change(self, action: str, program_id: Any, *, actor: str = "system", **metadata: Any) -> None:
        """Record a program create/update/activation change."""
        self.log_event(actor, action, f"program:{program_id}", "success", **metadata)
