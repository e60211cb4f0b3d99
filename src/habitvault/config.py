"""Application configuration objects and helpers."""

from __future__ import annotations

import os
import tempfile
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

PLACEHOLDER_SECRET = "replace-me"


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitVault"
    DB_FILENAME = "habitvault.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}
    JSON_SORT_KEYS = False
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITVAULT_SECRET_KEY", PLACEHOLDER_SECRET)
        self.JWT_SECRET_KEY = os.getenv("HABITVAULT_JWT_SECRET_KEY", self.SECRET_KEY)
        self.JWT_ACCESS_TOKEN_EXPIRES = timedelta(
            hours=int(os.getenv("HABITVAULT_TOKEN_HOURS", "24"))
        )
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITVAULT_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITVAULT_DATABASE_URL", self._build_sqlite_url())
        self.CORS_ORIGINS = _env_list("HABITVAULT_CORS_ORIGINS", "*")
        if not self.DEV_MODE and self.SECRET_KEY == PLACEHOLDER_SECRET:
            raise ValueError("HABITVAULT_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITVAULT_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Isolated configuration for the test suite: throwaway data dir and database."""

    TESTING = True

    def _resolve_data_dir(self) -> Path:
        return Path(tempfile.mkdtemp(prefix="habitvault-test-"))

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = self._build_sqlite_url()
        self.SECRET_KEY = "test-secret"
        self.JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
