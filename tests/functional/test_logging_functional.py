"""Functional tests for applying the configured log level."""

from __future__ import annotations

import logging
from contextlib import contextmanager

import pytest

from rubric.logging_setup import APP_LOGGER, build_logging_config, configure_logging
from rubric.main import create_app


@pytest.fixture(autouse=True)
def restore_app_logger_level():
    app_logger = logging.getLogger(APP_LOGGER)
    before = app_logger.level
    yield
    app_logger.setLevel(before)


@contextmanager
def root_handlers(replacement):
    """Swap the root handler list in place for the duration of the block."""
    handlers = logging.getLogger().handlers
    saved = list(handlers)
    handlers[:] = replacement
    try:
        yield
    finally:
        handlers[:] = saved


def test_built_config_uses_level_for_handler_root_and_app_logger():
    cfg = build_logging_config("warning")

    assert cfg["handlers"]["console"]["level"] == "WARNING"
    assert cfg["root"]["level"] == "WARNING"
    assert cfg["loggers"][APP_LOGGER]["level"] == "WARNING"
    assert cfg["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"


def test_first_configuration_installs_dict_config(mocker):
    dict_config = mocker.patch("rubric.logging_setup.dictConfig")

    with root_handlers([]):
        configure_logging("DEBUG")

    dict_config.assert_called_once_with(build_logging_config("DEBUG"))


def test_existing_handlers_are_kept_and_level_still_applied(mocker):
    existing = logging.NullHandler()
    dict_config = mocker.patch("rubric.logging_setup.dictConfig")

    with root_handlers([existing]):
        configure_logging("ERROR")
        assert logging.getLogger().handlers == [existing]

    dict_config.assert_not_called()
    assert logging.getLogger(APP_LOGGER).level == logging.ERROR


def test_create_app_applies_configured_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    app = create_app()

    assert app.state.config.logging.level == "DEBUG"
    assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
    assert logging.getLogger("rubric.logic.advice_reconciler").isEnabledFor(logging.DEBUG)
