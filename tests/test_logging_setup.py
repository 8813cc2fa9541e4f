import json
import logging

import pytest
import structlog

from helperkit.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_json(capsys):
    configure_logging(level="DEBUG", fmt="json")

    structlog.get_logger("helperkit.tests").info("something_happened", value=3)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "something_happened"
    assert event["value"] == 3
    assert event["level"] == "info"
    assert event["logger"] == "helperkit.tests"


def test_configure_logging_from_config(config):
    configure_logging(config=config)

    assert logging.getLogger().level == logging.INFO


def test_configure_logging_level_argument():
    configure_logging(level="warning", fmt="console")

    assert logging.getLogger().level == logging.WARNING
