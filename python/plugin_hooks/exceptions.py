"""Exceptions raised by the plugin hook registry."""

from typing import Optional


class PluginHooksError(Exception):
    """Base exception for all plugin hook errors."""

    pass


class ConfigurationError(PluginHooksError):
    """Raised when environment configuration for the package is invalid."""

    pass


class InvalidDurationError(PluginHooksError, ValueError):
    """Raised when a duration value cannot be converted to milliseconds."""

    def __init__(self, value: object, reason: Optional[str] = None) -> None:
        self.value = value
        message = f"Invalid duration: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidHookOptionsError(PluginHooksError, ValueError):
    """Raised when hook or registry options fail validation."""

    pass


class HookTimeoutError(PluginHooksError, TimeoutError):
    """Raised when a handler does not settle within its timeout.

    Attributes:
        timeout_ms: The deadline that elapsed, in milliseconds
        handler_name: Name of the handler that timed out, when known
    """

    def __init__(self, timeout_ms: int, handler_name: Optional[str] = None) -> None:
        self.timeout_ms = timeout_ms
        self.handler_name = handler_name
        target = f"Handler {handler_name!r}" if handler_name else "Operation"
        super().__init__(f"{target} timed out after {timeout_ms}ms")
