"""Environment configuration for plugin hooks."""

import os

from .common.duration import parse_duration
from .exceptions import ConfigurationError, InvalidDurationError
from .logging_config import get_logger

logger = get_logger(__name__)


class PluginHooksEnvVars:
    """Plugin hooks environment variable names."""

    DEFAULT_TIMEOUT = "PLUGIN_HOOKS_DEFAULT_TIMEOUT"
    LOG_LEVEL = "PLUGIN_HOOKS_LOG_LEVEL"


class PluginHooksDefaults:
    """Plugin hooks default values."""

    TIMEOUT = "20 seconds"
    PRIORITY = 100


# Plugin hooks environment variable configuration mapping
PLUGIN_HOOKS_ENV_CONFIG = {
    PluginHooksEnvVars.DEFAULT_TIMEOUT: {
        "default": PluginHooksDefaults.TIMEOUT,
        "description": "Fallback handler timeout when no other timeout applies (default: 20 seconds)",
    },
    PluginHooksEnvVars.LOG_LEVEL: {
        "default": "ERROR",
        "description": "Log level for the plugin_hooks logger, falls back to LOG_LEVEL",
    },
}


def get_default_timeout_ms() -> int:
    """Resolve the library-wide fallback timeout in milliseconds.

    Reads PLUGIN_HOOKS_DEFAULT_TIMEOUT on every call so the value can be
    changed at runtime; defaults to 20 seconds.

    Raises:
        ConfigurationError: If the environment variable holds an invalid duration
    """
    value = os.getenv(PluginHooksEnvVars.DEFAULT_TIMEOUT, "").strip()
    if not value:
        return parse_duration(PluginHooksDefaults.TIMEOUT)

    try:
        return parse_duration(value)
    except InvalidDurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ConfigurationError(
            f"{PluginHooksEnvVars.DEFAULT_TIMEOUT} must be a duration, got '{value}'"
        ) from e
