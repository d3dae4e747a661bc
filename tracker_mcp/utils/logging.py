"""
Logging for the tracker server
stdout carries the MCP stdio protocol, so records only ever go to stderr
"""

import logging
import sys
from typing import Optional

from ..config import Config

PACKAGE_LOGGER = "tracker-mcp"
LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level() -> int:
    if not Config.ENABLE_LOGGING:
        return logging.CRITICAL
    return logging.DEBUG if Config.DEBUG else logging.INFO


def setup_logging(name: Optional[str] = None, stream=None) -> logging.Logger:
    """
    Configure a logger with a single stderr handler

    FastMCP installs its own root handler, so the logger does not
    propagate; otherwise every record would print twice.

    Args:
        name: Logger name (default: the package logger)
        stream: Handler stream (default: sys.stderr)
    """
    logger = logging.getLogger(name or PACKAGE_LOGGER)
    level = _level()
    logger.setLevel(level)
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


logger = setup_logging()
