#!/usr/bin/env python3
import logging

import pytest
import structlog

from docschema.core.log import _level_number, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.mark.parametrize("level,expected", [
    ("DEBUG", logging.DEBUG),
    (" warning ", logging.WARNING),
    ("error", logging.ERROR),
    (logging.INFO, logging.INFO),
])
def test_level_number(level, expected):
    assert _level_number(level) == expected


def test_unknown_level_raises():
    with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
        configure_logging("LOUD")


def test_level_filter_applies(capsys: pytest.CaptureFixture):
    configure_logging("WARNING")
    log = get_logger("tests.log")
    log.info("hidden_event")
    log.warning("shown_event", collection="users")

    err = capsys.readouterr().err
    assert "shown_event" in err
    assert "hidden_event" not in err
