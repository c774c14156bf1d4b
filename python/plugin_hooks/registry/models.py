"""Models for hook registration and registry configuration."""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..common.duration import parse_duration
from ..config import PluginHooksDefaults
from ..exceptions import InvalidHookOptionsError


def _to_milliseconds(value: Any) -> Optional[int]:
    if value is None:
        return None
    return parse_duration(value)


class HookOptions(BaseModel):
    """Options recognized by ``HookRegistry.add``.

    Unknown fields are kept so they can be echoed back to the handler, but the
    handler always receives the caller's original mapping, not this model.
    """

    model_config = ConfigDict(extra="allow")

    priority: int = PluginHooksDefaults.PRIORITY
    timeout: Optional[int] = None

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> Optional[int]:
        return _to_milliseconds(value)


class RegistryOptions(BaseModel):
    """Registry-wide configuration.

    Attributes:
        context: Value handed to every handler that accepts a ``context`` keyword
        timeout: Registry default timeout in milliseconds
        error: Callback receiving handler failures; when set, failures are
            isolated and the chain continues
    """

    context: Any = None
    timeout: Optional[int] = None
    error: Optional[Callable[..., Any]] = None

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> Optional[int]:
        return _to_milliseconds(value)


def parse_hook_options(options: Optional[Mapping[str, Any]]) -> HookOptions:
    """Validate raw ``add`` options.

    Raises:
        InvalidHookOptionsError: If priority or timeout are invalid
    """
    try:
        return HookOptions.model_validate(dict(options or {}))
    except ValidationError as e:
        raise InvalidHookOptionsError(f"Invalid hook options: {e}") from e


def parse_registry_options(
    options: Optional[Any] = None, **overrides: Any
) -> RegistryOptions:
    """Validate registry options given as a mapping or ``RegistryOptions``.

    Keyword overrides that are not ``None`` take precedence over ``options``.

    Raises:
        InvalidHookOptionsError: If any option is invalid
    """
    if isinstance(options, RegistryOptions):
        # Attribute access keeps the context object itself instead of a dumped copy
        values: Dict[str, Any] = {
            name: getattr(options, name) for name in RegistryOptions.model_fields
        }
    else:
        values = dict(options or {})
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return RegistryOptions.model_validate(values)
    except ValidationError as e:
        raise InvalidHookOptionsError(f"Invalid registry options: {e}") from e


def accepts_context(handler: Any) -> bool:
    """Check whether ``handler`` takes ``context`` as a keyword-only argument.

    Handlers opt in only by declaring ``*, context``; ``**kwargs`` alone does not
    opt in. Anything whose signature cannot be inspected (including
    non-callables) does not either.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return False

    for parameter in signature.parameters.values():
        if (
            parameter.name == "context"
            and parameter.kind is inspect.Parameter.KEYWORD_ONLY
        ):
            return True
    return False


def handler_name(handler: Any) -> str:
    return getattr(handler, "__name__", repr(handler))


@dataclass(frozen=True)
class HandlerRunner:
    """Invocation wrapper bundling a handler with its timeout and context.

    Calling the runner with ``(result, *args)`` calls
    ``handler(result, *args, options)``, adding ``context=`` for handlers that
    accept it. The return value may be a plain value or an awaitable.
    """

    handler: Callable[..., Any]
    options: Mapping[str, Any]
    timeout_ms: int
    context: Any = None
    pass_context: bool = False

    @property
    def name(self) -> str:
        return handler_name(self.handler)

    def __call__(self, result: Any, *args: Any) -> Any:
        if self.pass_context:
            return self.handler(result, *args, self.options, context=self.context)
        return self.handler(result, *args, self.options)


@dataclass(frozen=True)
class HandlerEntry:
    """One registered handler for a map-name and key.

    Attributes:
        priority: Sort weight, higher runs earlier
        handler: The caller's original callable, matched by identity on removal
        runner: Bound invocation wrapper for the handler
        options: Raw options given at registration
    """

    priority: int
    handler: Callable[..., Any]
    runner: HandlerRunner
    options: Mapping[str, Any] = field(default_factory=dict)
