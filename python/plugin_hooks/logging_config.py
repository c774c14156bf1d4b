"""Logging configuration for plugin hooks."""

import logging
import os
import sys
from typing import Union

DEFAULT_LEVEL = "ERROR"


def parse_level(level: str) -> Union[int, str]:
    """Convert a log level string to something `Logger.setLevel` accepts.

    Numeric strings (including negative ones) become ints, anything else is
    upper-cased and returned as a level name.
    """
    try:
        return int(level)
    except ValueError:
        return level.upper()


def get_logger(name: str = "plugin_hooks") -> logging.Logger:
    """Get a configured logger for the package.

    The logger uses PLUGIN_HOOKS_LOG_LEVEL (or LOG_LEVEL) to determine the log level.
    If not set, defaults to ERROR level, which effectively disables most package logging.

    Returns:
        Configured logger instance for the package.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = os.getenv("PLUGIN_HOOKS_LOG_LEVEL", os.getenv("LOG_LEVEL", DEFAULT_LEVEL))

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "[%(levelname)s] %(name)s - %(filename)s:%(lineno)d: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        # Unknown level names fall back to ERROR instead of crashing at import
        try:
            logger.setLevel(parse_level(level))
        except (ValueError, TypeError):
            logger.setLevel(DEFAULT_LEVEL)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    return logger


# Package logger instance
logger = get_logger()
