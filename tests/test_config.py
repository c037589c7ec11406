"""
Tests for settings and logging configuration
"""

import logging

import pytest
from pydantic import ValidationError

from config import Settings, get_settings
from logging_config import setup_logger


def test_default_settings(monkeypatch):
    for key in ("STRICT_PARENTS", "CONVERGENCE", "RANKDIR", "INCLUDE_UNRESOLVED", "LOG_LEVEL"):
        monkeypatch.delenv(f"GENTREE_{key}", raising=False)

    settings = get_settings()

    assert settings.strict_parents is False
    assert settings.convergence == "overwrite"
    assert settings.rankdir == "BT"
    assert settings.include_unresolved is True
    assert settings.log_file is None


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GENTREE_CONVERGENCE", "error")
    monkeypatch.setenv("GENTREE_RANKDIR", "LR")

    settings = get_settings()

    assert settings.convergence == "error"
    assert settings.rankdir == "LR"


def test_invalid_convergence_rejected():
    with pytest.raises(ValidationError):
        Settings(convergence="max")


def test_setup_logger_with_file(tmp_path):
    log_file = tmp_path / "gentree.log"
    logger = setup_logger("gentree_test_file", level="DEBUG", log_file=log_file)

    logger.debug("Test message")

    assert logger.level == logging.DEBUG
    assert "Test message" in log_file.read_text()


def test_duplicate_logger_handlers():
    logger1 = setup_logger("gentree_duplicate_test")
    initial_handlers = len(logger1.handlers)

    logger2 = setup_logger("gentree_duplicate_test", level="WARNING")

    assert logger1 is logger2
    assert len(logger2.handlers) == initial_handlers
    assert logger2.level == logging.WARNING


def test_invalid_log_level_rejected(monkeypatch):
    monkeypatch.setenv("GENTREE_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        get_settings()
