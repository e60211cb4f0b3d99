"""Database and extension wiring for HabitVault."""

from __future__ import annotations

from datetime import date

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager, get_jwt_identity

from .config import BaseConfig
from .domain.dates import parse_iso_date
from .infra.database import SessionFactory, bootstrap_database
from .services.habits import HabitTracker

jwt = JWTManager()
cors = CORS()

EXTENSION_KEY = "habitvault"


def init_db(app: Flask) -> None:
    """Create the engine and session factory and store them on the app."""

    config: BaseConfig = app.config["HABITVAULT_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    # Sessions are opened per repository call, so nothing is held per request.
    app.extensions[EXTENSION_KEY] = {"engine": engine, "session_factory": session_factory}


def init_extensions(app: Flask) -> None:
    """Initialize JWT and CORS with the app's configuration."""

    config: BaseConfig = app.config["HABITVAULT_CONFIG"]
    jwt.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": config.CORS_ORIGINS}})


def get_session_factory() -> SessionFactory:
    """Return the session factory bound to the current app."""

    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


def current_user_id() -> int:
    """Return the authenticated user's id from the request's access token."""

    return int(get_jwt_identity())


def request_today() -> date:
    """Evaluation date for this request: ``?today=YYYY-MM-DD`` or the server date."""

    raw = request.args.get("today")
    return parse_iso_date(raw) if raw else date.today()


def current_tracker() -> HabitTracker:
    """Build a tracker for the authenticated user, pinned to the request's date."""

    today = request_today()
    return HabitTracker(get_session_factory(), current_user_id(), today_provider=lambda: today)


@jwt.unauthorized_loader
def _missing_token(reason: str):
    return jsonify({"ok": False, "error": "unauthorized", "message": reason}), 401


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    return jsonify({"ok": False, "error": "unauthorized", "message": reason}), 401


@jwt.expired_token_loader
def _expired_token(_header, _payload):
    return jsonify({"ok": False, "error": "unauthorized", "message": "Token has expired"}), 401
