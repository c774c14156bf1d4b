"""Utility functions for creating hook registration decorators."""

from typing import TYPE_CHECKING, Any, Callable, Optional

from ..logging_config import logger

if TYPE_CHECKING:
    from .registry import HookRegistry


def create_hook_decorator(
    registry: "HookRegistry", map_name: str, key: str
) -> Callable[..., Any]:
    """Create a decorator that registers functions as hooks.

    Keyword arguments given to the decorator become the hook options, e.g.
    ``priority``, ``timeout`` or any opaque value the handler expects to
    receive back as its trailing argument.

    Args:
        registry: Registry the decorated functions are added to
        map_name: Category of hooks to register under
        key: Extension point within the map

    Returns:
        A decorator that immediately registers the decorated function and
        returns it unchanged.
    """

    def decorator(
        func: Optional[Callable[..., Any]] = None,
        **options: Any,
    ) -> Callable[..., Any]:
        """Register a hook with optional options.

        Supports both @decorator and @decorator(param=value) syntax.
        """
        # Handle both @decorator and @decorator() syntax
        if func is None:
            # Called with parameters: @decorator(param=value)
            def wrapper(f: Callable[..., Any]) -> Callable[..., Any]:
                return decorator(f, **options)

            return wrapper

        logger.debug(
            "[%s:%s] hook decorator called on function: %s",
            map_name,
            key,
            getattr(func, "__name__", repr(func)),
        )

        registry.add(map_name, key, func, options if options else None)

        if options:
            logger.debug(
                "[%s:%s] Hook options: %s", map_name, key, list(options.keys())
            )

        # Return the original function unchanged - it stays directly callable
        return func

    return decorator
