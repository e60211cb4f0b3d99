"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from habitvault.config import TestConfig
from habitvault.logging_config import JSONFormatter, get_logger, setup_logging


def _record(msg="Test message", level=logging.INFO, exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the core fields as one JSON object."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record("Error occurred", logging.ERROR, exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.habit_id = 7
    record.day = "2024-01-15"

    log_data = json.loads(JSONFormatter().format(record))
    assert log_data["extra"] == {"habit_id": 7, "day": "2024-01-15"}


def test_setup_logging(tmp_path):
    """Setup creates the rotating JSON log file under DATA_DIR/logs."""
    config = TestConfig()
    config.DATA_DIR = tmp_path

    logger = setup_logging(config)

    assert logger.name == "habitvault"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "habitvault.log"
    assert log_file.exists()

    get_logger("tests").info("Habit status marked", extra={"habit_id": 1})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["message"] == "Habit status marked"
    assert entries[-1]["extra"] == {"habit_id": 1}


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    config = TestConfig()
    config.DATA_DIR = tmp_path

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """get_logger namespaces module loggers under the package logger."""
    assert get_logger("module1").name == "habitvault.module1"
    assert get_logger("habitvault.services.habits").name == "habitvault.services.habits"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = TestConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level


def test_json_formatter_adds_request_context(app):
    with app.test_request_context("/api/habits/3/logs/2024-01-15", method="PUT"):
        log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["request"] == {"method": "PUT", "path": "/api/habits/3/logs/2024-01-15"}
