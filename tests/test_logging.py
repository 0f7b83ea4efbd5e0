import json
import logging

import structlog
from structlog.testing import capture_logs

import validation
from validation.logging import (
    LoggerRegistry,
    configure_logging,
    derive_logger,
    errors_logger,
    get_logger,
)


def test_json_output(capsys, restore_logging):
    configure_logging(level="DEBUG", json_logs=True)
    get_logger("validation.test").info("hello", answer=42)

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "hello"
    assert record["answer"] == 42
    assert record["level"] == "info"
    assert record["logger"] == "validation.test"
    assert record["service"] == "validation"
    assert record["version"] == validation.__version__
    assert "timestamp" in record


def test_level_applies_to_package_logger(restore_logging):
    configure_logging(level="WARNING", json_logs=False)
    assert logging.getLogger("validation").level == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_defaults_come_from_settings(monkeypatch, restore_logging):
    monkeypatch.setenv("VALIDATION_LOG_LEVEL", "ERROR")
    configure_logging()
    assert logging.getLogger("validation").level == logging.ERROR


def test_registry_reuses_loggers():
    assert LoggerRegistry.get("derive") is LoggerRegistry.get("derive")
    assert derive_logger() is LoggerRegistry.get("derive")
    assert errors_logger() is LoggerRegistry.get("errors")


def test_domain_loggers_emit():
    structlog.reset_defaults()
    with capture_logs() as logs:
        errors_logger().warning("validation_error_response", error_code=400)
    assert logs == [{"event": "validation_error_response", "error_code": 400, "log_level": "warning"}]
