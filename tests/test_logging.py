# tests/test_logging.py
"""Tests for logger configuration."""

import io
import logging
from unittest.mock import patch


def test_package_logger_has_single_handler():
    from tracker_mcp.utils.logging import PACKAGE_LOGGER, logger

    assert logger.name == PACKAGE_LOGGER
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_setup_logging_format():
    from tracker_mcp.utils.logging import setup_logging

    stream = io.StringIO()
    log = setup_logging("tracker-mcp.test-format", stream=stream)
    log.info("Listed 3 issues (redmine)")

    line = stream.getvalue()
    assert "INFO [tracker-mcp.test-format] Listed 3 issues (redmine)" in line
    assert line.startswith("[")


def test_setup_logging_disabled():
    from tracker_mcp.config import Config
    from tracker_mcp.utils.logging import setup_logging

    stream = io.StringIO()
    with patch.object(Config, "ENABLE_LOGGING", False):
        log = setup_logging("tracker-mcp.test-disabled", stream=stream)
    log.error("hidden")

    assert log.level == logging.CRITICAL
    assert stream.getvalue() == ""


def test_setup_logging_reuses_handler():
    from tracker_mcp.config import Config
    from tracker_mcp.utils.logging import setup_logging

    setup_logging("tracker-mcp.test-reuse", stream=io.StringIO())
    with patch.object(Config, "DEBUG", True):
        log = setup_logging("tracker-mcp.test-reuse")

    assert len(log.handlers) == 1
    assert log.handlers[0].level == logging.DEBUG
