"""
Tests for logging configuration.
"""

import logging

import pytest
import structlog

from slotted_context.config.settings import Settings
from slotted_context.utils.logging import configure_from_settings, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    structlog_config = structlog.get_config()
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.configure(**structlog_config)


def test_level_applies_on_every_call():
    setup_logging(level="ERROR")
    assert logging.getLogger().level == logging.ERROR

    setup_logging(level="debug")
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    setup_logging(level="chatty")
    assert logging.getLogger().level == logging.INFO


def test_settings_drive_configuration(tmp_path):
    log_file = tmp_path / "context.log"

    configure_from_settings(Settings(log_level="WARNING", log_json=False, log_file=str(log_file)))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_reconfiguring_replaces_handlers(tmp_path):
    setup_logging(log_file=str(tmp_path / "first.log"))
    setup_logging()

    assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
