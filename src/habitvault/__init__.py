"""HabitVault application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "habitvault.blueprints.auth"
    yield "habitvault.blueprints.habits"
    yield "habitvault.blueprints.analytics"
    yield "habitvault.blueprints.preferences"


def create_app(config_name: str | None = None, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance.

    Pass ``config`` to use a prepared configuration object instead of
    building one from ``config_name``.
    """

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITVAULT_CONFIG"] = config_obj

    # Imported lazily so model classes can be used without pulling in Flask wiring.
    from .blueprints import register_error_handlers
    from .cli import init_app as init_cli
    from .extensions import init_db, init_extensions
    from .logging_config import setup_logging

    logger = setup_logging(config_obj)
    init_db(app)
    init_extensions(app)
    _register_blueprints(app)
    register_error_handlers(app)
    init_cli(app)

    logger.info("Application created", extra={"config": type(config_obj).__name__})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
