"""Logging configuration."""

import logging
import sys
from config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configured_level() -> int:
    """Level named by LOG_LEVEL, INFO when the name is unknown."""
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str = __name__) -> logging.Logger:
    """Return a module logger writing to stdout.

    The handler is attached once per logger name, so repeated imports do
    not duplicate output.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_configured_level())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
