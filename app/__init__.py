from __future__ import annotations

import atexit
import logging
import threading
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.programs import programs_api
from app.config import load_config, setup_logging

V1 = "/api/v1"


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    if config_overrides:
        for key, value in config_overrides.items():
            setattr(config, key if hasattr(config, key) else key.lower(), value)

    # Configure logging early so container startup is visible in the terminal and radiocms.log.
    setup_logging(debug=config.DEBUG, level=config.log_level, log_dir=config.log_dir)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config)
    flask_app.config["CONTAINER"] = container
    container.database.init_app(flask_app)

    _shutdown_lock = threading.Lock()
    _shutdown_done = False

    def _graceful_shutdown(reason: str = "unknown") -> None:
        nonlocal _shutdown_done
        with _shutdown_lock:
            if _shutdown_done:
                return
            _shutdown_done = True
        logging.info("Graceful shutdown initiated (%s)", reason)
        try:
            container.shutdown()
        except Exception as exc:
            logging.warning("Error during graceful shutdown: %s", exc)
        atexit.unregister(_graceful_shutdown)

    atexit.register(_graceful_shutdown, "atexit")
    flask_app.extensions["radiocms_shutdown"] = _graceful_shutdown

    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from app.domain.exceptions import RadioCMSError
        from app.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, RadioCMSError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc), status, details=exc.detail or None)

        return safe_error(exc, 500, context="unhandled")

    flask_app.register_blueprint(programs_api, url_prefix=V1)

    for bp_name in flask_app.blueprints:
        logging.info("Registered blueprint: %s", bp_name)

    logger = logging.getLogger(__name__)
    logger.info("Radio scheduling application initialized successfully.")

    return flask_app
