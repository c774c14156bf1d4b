"""Plugin hooks.

Prioritized, asynchronous hook chains for building extension points:

- Registry: from .registry import HookRegistry, create
- Durations and deadlines: from .common import parse_duration, with_timeout
"""

from .common import parse_duration, with_timeout
from .exceptions import (
    ConfigurationError,
    HookTimeoutError,
    InvalidDurationError,
    InvalidHookOptionsError,
    PluginHooksError,
)
from .registry import HookRegistry, RegistryOptions, create

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "HookRegistry",
    "HookTimeoutError",
    "InvalidDurationError",
    "InvalidHookOptionsError",
    "PluginHooksError",
    "RegistryOptions",
    "create",
    "parse_duration",
    "with_timeout",
]
