"""Flask application factory."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request
from loguru import logger
from werkzeug.exceptions import HTTPException

from ipmiserver.api.routes import ipmi_bp, request_context
from ipmiserver.ipmi.command import DEFAULT_PROGRAM
from ipmiserver.ipmi.runner import DEFAULT_TIMEOUT

INTERNAL_ERROR_MESSAGE = "Internal server error"


def create_app(config: dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Optional config overrides (e.g. ``{"IPMITOOL_PATH": "/usr/bin/ipmitool"}``).

    Returns:
        Configured Flask app instance.
    """
    app = Flask(__name__)
    app.config.update(IPMITOOL_PATH=DEFAULT_PROGRAM, IPMI_TIMEOUT=DEFAULT_TIMEOUT)
    if config:
        app.config.update(config)

    app.register_blueprint(ipmi_bp)
    _register_error_handlers(app)
    return app


def _register_error_handlers(app: Flask) -> None:
    """Register the catch-all handler for faults the endpoints did not expect."""

    @app.errorhandler(Exception)
    def handle_exception(e: Exception) -> Any:
        if isinstance(e, HTTPException):
            return e

        context = request_context()
        detail = context.redact(f"{type(e).__name__}: {e}")
        logger.error(f"Unhandled exception on {request.path}: {detail}")
        context.add_debug(detail)
        return jsonify({"success": False, "message": INTERNAL_ERROR_MESSAGE, "debug": context.debug_text()}), 500
