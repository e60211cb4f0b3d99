"""Blueprint exports and JSON error handling."""

from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from ..errors import (
    AuthenticationError,
    DuplicateError,
    HabitVaultError,
    NotFoundError,
)
from ..logging_config import get_logger
from . import analytics, auth, habits, preferences

logger = get_logger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (DuplicateError, 409),
    (AuthenticationError, 401),
)


def _status_for(exc: HabitVaultError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    """Render domain, validation and HTTP errors as JSON bodies."""

    @app.errorhandler(HabitVaultError)
    def _domain_error(exc: HabitVaultError):
        status = _status_for(exc)
        code = exc.code if type(exc) is not HabitVaultError else "validation_error"
        return jsonify({"ok": False, "error": code, "message": str(exc)}), status

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "Invalid value")}
            for err in exc.errors(include_url=False)
        ]
        return (
            jsonify(
                {
                    "ok": False,
                    "error": "validation_error",
                    "message": "Request payload is invalid",
                    "details": details,
                }
            ),
            400,
        )

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return (
            jsonify(
                {
                    "ok": False,
                    "error": (exc.name or "error").lower().replace(" ", "_"),
                    "message": exc.description,
                }
            ),
            exc.code or 500,
        )

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"ok": False, "error": "server_error", "message": "Internal error"}), 500


__all__ = [
    "analytics",
    "auth",
    "habits",
    "preferences",
    "register_error_handlers",
]
