"""Unit tests for structlog configuration."""

import logging

import pytest
import structlog

from infrastructure import logging as app_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_force_color_selects_console_renderer(monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")

    app_logging.configure_logging()

    renderer = structlog.get_config()["processors"][-1]
    assert isinstance(renderer, structlog.dev.ConsoleRenderer)


def test_non_interactive_output_is_json(monkeypatch):
    monkeypatch.setattr(app_logging, "_wants_color", lambda: False)

    app_logging.configure_logging()

    renderer = structlog.get_config()["processors"][-1]
    assert isinstance(renderer, structlog.processors.JSONRenderer)


def test_library_loggers_follow_debug_flag(monkeypatch):
    monkeypatch.setattr(app_logging, "_wants_color", lambda: False)

    app_logging.configure_logging(debug=False)
    assert logging.getLogger("alembic").level == logging.WARNING

    app_logging.configure_logging(debug=True)
    assert logging.getLogger("alembic").level == logging.DEBUG
