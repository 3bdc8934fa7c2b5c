"""
Unit tests for structlog configuration.
"""

import logging

import pytest
import structlog

from resilient_fetch.logging_config import add_app_context, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_add_app_context():
    event_dict = add_app_context(None, "info", {"event": "Request started"})

    assert event_dict["app"] == "resilient-fetch"


@pytest.mark.parametrize("environment", ["development", "production"])
def test_configure_logging_installs_single_handler(environment):
    configure_logging("DEBUG", environment)
    root_logger = logging.getLogger()

    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.DEBUG
    assert isinstance(root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_production_renders_json(capsys):
    configure_logging("INFO", "production")

    structlog.get_logger("resilient_fetch.test").info("Request succeeded", status=200)

    last_line = capsys.readouterr().out.strip().splitlines()[-1]
    assert '"event": "Request succeeded"' in last_line
    assert '"status": 200' in last_line
    assert '"app": "resilient-fetch"' in last_line


def test_unknown_level_falls_back_to_info():
    configure_logging("chatty", "development")

    assert logging.getLogger().level == logging.INFO


def test_defaults_come_from_settings(test_settings, capsys):
    test_settings.LOG_LEVEL = "WARNING"
    test_settings.ENVIRONMENT = "production"

    configure_logging(settings=test_settings)
    structlog.get_logger("resilient_fetch.test").warning("Network failure persists", cycles=1)

    assert logging.getLogger().level == logging.WARNING
    last_line = capsys.readouterr().out.strip().splitlines()[-1]
    assert '"event": "Network failure persists"' in last_line


def test_explicit_arguments_override_settings(test_settings):
    test_settings.LOG_LEVEL = "WARNING"

    configure_logging("DEBUG", settings=test_settings)

    assert logging.getLogger().level == logging.DEBUG
