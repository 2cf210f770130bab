"""
Tests for the logging setup.
"""
import logging

import pytest

from talk_catalog_api.app.core import logging_config
from talk_catalog_api.app.core.logging_config import setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    """Root logger as if ``setup_logging`` had never run; cleaned up afterwards."""
    root = logging.getLogger()
    monkeypatch.setattr(logging_config, "_installed", [])
    monkeypatch.setattr(root, "level", root.level)
    yield root
    for handler in logging_config._installed:
        root.removeHandler(handler)
        handler.close()


def test_console_only_by_default(root_logger):
    setup_logging("debug")

    assert root_logger.level == logging.DEBUG
    assert [type(h) for h in logging_config._installed] == [logging.StreamHandler]
    assert all(h in root_logger.handlers for h in logging_config._installed)


def test_log_file_receives_records(root_logger, tmp_path):
    log_file = tmp_path / "logs" / "talk_catalog.log"

    setup_logging("INFO", str(log_file))
    logging.getLogger("talk_catalog_api.test").info("catalog reloaded")
    for handler in logging_config._installed:
        handler.flush()

    assert len(logging_config._installed) == 2
    content = log_file.read_text(encoding="utf-8")
    assert "[INFO] talk_catalog_api.test: catalog reloaded" in content


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.INFO


def test_second_call_adds_no_handlers(root_logger, tmp_path):
    setup_logging("INFO")
    handlers_after_first = list(root_logger.handlers)

    setup_logging("DEBUG", str(tmp_path / "unused.log"))

    assert root_logger.handlers == handlers_after_first
    assert root_logger.level == logging.INFO
    assert not (tmp_path / "unused.log").exists()


def test_create_app_writes_to_configured_log_file(root_logger, tmp_path, monkeypatch):
    from talk_catalog_api.app.core.config import settings
    from talk_catalog_api.app.main import create_app

    log_file = tmp_path / "api.log"
    monkeypatch.setattr(settings, "log_file", str(log_file))

    create_app()

    assert log_file.exists()
    assert any(isinstance(h, logging.FileHandler) for h in logging_config._installed)
