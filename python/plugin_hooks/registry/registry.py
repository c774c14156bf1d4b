"""Hook registry: ordered registration, removal and chained execution."""

import inspect
from datetime import timedelta
from typing import Any, Callable, Mapping, MutableMapping, Optional, Tuple, Union

from ..common.duration import parse_duration
from ..common.timeout import with_timeout
from ..config import get_default_timeout_ms
from ..logging_config import logger
from .decorators import create_hook_decorator
from .models import (
    HandlerEntry,
    HandlerRunner,
    HookOptions,
    RegistryOptions,
    accepts_context,
    parse_hook_options,
    parse_registry_options,
)
from .store import MapCollection, RegistryStore


# Marks an omitted exec() data argument, so an explicit None is kept
_OMITTED: Any = object()


def _is_duration(value: Any) -> bool:
    # Methods or properties that happen to be named timeout are not durations
    return isinstance(value, (int, float, str, timedelta)) and not isinstance(
        value, bool
    )


def _by_priority(entry: HandlerEntry) -> int:
    return -entry.priority


def is_same_handler(registered: Any, handler: Any) -> bool:
    """Check whether ``registered`` is the very handler ``handler``.

    Matching is by identity. Bound methods are recreated on every attribute
    access, so two bound methods match when both their ``__self__`` and
    ``__func__`` are identical.
    """
    if registered is handler:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(handler):
        return (
            registered.__self__ is handler.__self__
            and registered.__func__ is handler.__func__
        )
    return False


def replaces_result(value: Any) -> bool:
    """Check whether a handler's return value replaces the running result.

    Follows JavaScript truthiness: ``None``, ``False``, numeric zero, NaN and
    the empty string keep the previous result. Empty containers are truthy
    here and do replace it.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    if isinstance(value, str):
        return value != ""
    return True


class HookRegistry:
    """Registry of prioritized hook handlers grouped by map-name and key.

    Handlers registered under the same map-name and key form a chain that
    ``exec`` runs sequentially, highest priority first, passing each handler
    the result of the previous one.

    Example:
        registry = HookRegistry(error=report_plugin_failure)

        async def add_signature(message, options):
            return {**message, "signature": options["signature"]}

        registry.add("mail", "before-send", add_signature, {"signature": "--"})
        message = await registry.exec("mail", "before-send", {"body": "hi"})
    """

    def __init__(
        self,
        mapping: Optional[MutableMapping[str, MapCollection]] = None,
        options: Optional[Union[RegistryOptions, Mapping[str, Any]]] = None,
        *,
        context: Any = None,
        timeout: Any = None,
        error: Optional[Callable[..., Any]] = None,
    ) -> None:
        """Initialize the registry.

        Args:
            mapping: Externally owned storage of map-name to keyed collections;
                a private dict is used when omitted
            options: Registry options as a mapping or ``RegistryOptions``
            context: Value passed to handlers accepting a ``context`` keyword
            timeout: Registry default handler timeout (any duration)
            error: Failure callback; when set, failing handlers are reported
                to it and the chain continues instead of aborting

        Raises:
            InvalidHookOptionsError: If the options fail validation
        """
        self._store = RegistryStore(mapping)
        self._options = parse_registry_options(
            options, context=context, timeout=timeout, error=error
        )

    @property
    def store(self) -> RegistryStore:
        return self._store

    @property
    def options(self) -> RegistryOptions:
        return self._options

    def _resolve_timeout_ms(
        self, hook_options: HookOptions, handler: Callable[..., Any]
    ) -> int:
        """Resolve the handler timeout, first non-None wins.

        1. ``timeout`` option given to ``add``
        2. ``timeout`` attribute on the handler itself
        3. Registry default ``timeout``
        4. Library fallback (PLUGIN_HOOKS_DEFAULT_TIMEOUT, else 20 seconds)
        """
        if hook_options.timeout is not None:
            return hook_options.timeout

        handler_timeout = getattr(handler, "timeout", None)
        if _is_duration(handler_timeout):
            return parse_duration(handler_timeout)

        if self._options.timeout is not None:
            return self._options.timeout

        return get_default_timeout_ms()

    def add(
        self,
        map_name: str,
        key: str,
        handler: Callable[..., Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Register a handler for ``map_name`` and ``key``.

        Args:
            map_name: Category of hooks, e.g. a subsystem name
            key: Extension point within the map, e.g. an event name
            handler: Callable returning a value or an awaitable. It is called
                as ``handler(result, *exec_args, options)``
            options: ``priority`` (default 100), ``timeout`` (duration) and any
                opaque fields; the mapping itself is passed to the handler

        Raises:
            InvalidHookOptionsError: If ``priority`` or ``timeout`` are invalid
            InvalidDurationError: If the handler's ``timeout`` attribute is invalid
        """
        hook_options = parse_hook_options(options)
        raw_options = options if options is not None else {}

        runner = HandlerRunner(
            handler=handler,
            options=raw_options,
            timeout_ms=self._resolve_timeout_ms(hook_options, handler),
            context=self._options.context,
            pass_context=accepts_context(handler),
        )
        entry = HandlerEntry(
            priority=hook_options.priority,
            handler=handler,
            runner=runner,
            options=raw_options,
        )

        collection = self._store.ensure_map(map_name)
        previous = collection.get(key) or []
        # Stored lists are replaced, never mutated; exec iterates a snapshot
        collection[key] = sorted([*previous, entry], key=_by_priority)

        logger.debug(
            "[%s:%s] Hook registered: %s (priority=%d, timeout=%dms)",
            map_name,
            key,
            runner.name,
            entry.priority,
            runner.timeout_ms,
        )

    def remove(
        self,
        map_name: str,
        key: str,
        handler: Optional[Callable[..., Any]] = None,
    ) -> None:
        """Remove ``handler`` (by identity), or every handler, from a key.

        The key is deleted from its map once no handlers remain.
        """
        collection = self._store.ensure_map(map_name)
        entries = collection.get(key)
        if entries is None:
            return

        if handler is not None:
            remaining = [
                entry
                for entry in entries
                if not is_same_handler(entry.handler, handler)
            ]
        else:
            remaining = []

        if remaining:
            collection[key] = remaining
        else:
            del collection[key]

        logger.debug(
            "[%s:%s] Removed %d hook(s)",
            map_name,
            key,
            len(entries) - len(remaining),
        )

    async def exec(
        self, map_name: str, key: str, data: Any = _OMITTED, *args: Any
    ) -> Any:
        """Run every handler registered for ``map_name`` and ``key`` in order.

        Each handler receives the running result followed by ``args`` and its
        registration options. A returned value replaces the running result
        unless it is falsy (see ``replaces_result``). Awaitable results are
        raced against the handler's timeout.

        Args:
            map_name: Category of hooks
            key: Extension point within the map
            data: Initial result, a new empty dict when omitted. An explicit
                ``None`` is kept as the initial result
            *args: Extra positional arguments for every handler

        Returns:
            The final result of the chain, ``data`` when no handler is registered

        Raises:
            Exception: The first handler failure (including ``HookTimeoutError``)
                when no ``error`` callback is configured
        """
        result = {} if data is _OMITTED else data
        entries: Tuple[HandlerEntry, ...] = tuple(
            self._store.ensure_map(map_name).get(key) or ()
        )
        if not entries:
            return result

        for entry in entries:
            runner = entry.runner
            try:
                value = await self._invoke(runner, result, args)
            except Exception as e:
                if self._options.error is None:
                    logger.error(
                        "[%s:%s] Hook %s failed, aborting chain: %s",
                        map_name,
                        key,
                        runner.name,
                        e,
                    )
                    raise

                logger.warning(
                    "[%s:%s] Hook %s failed: %s", map_name, key, runner.name, e
                )
                outcome = self._options.error(e)
                if inspect.isawaitable(outcome):
                    await outcome
                continue

            if replaces_result(value):
                result = value

        return result

    @staticmethod
    async def _invoke(runner: HandlerRunner, result: Any, args: Tuple[Any, ...]) -> Any:
        outcome = runner(result, *args)
        if inspect.isawaitable(outcome):
            return await with_timeout(outcome, runner.timeout_ms, runner.name)
        return outcome

    def hook(
        self,
        map_name: str,
        key: str,
        func: Optional[Callable[..., Any]] = None,
        **options: Any,
    ) -> Callable[..., Any]:
        """Register the decorated function as a handler.

        Supports both ``@registry.hook("map", "key")`` and
        ``@registry.hook("map", "key", priority=10, timeout="2 seconds")``.
        """
        return create_hook_decorator(self, map_name, key)(func, **options)


def create(
    mapping: Optional[MutableMapping[str, MapCollection]] = None,
    options: Optional[Union[RegistryOptions, Mapping[str, Any]]] = None,
) -> HookRegistry:
    """Create a hook registry.

    Args:
        mapping: Optional externally owned storage for the registry
        options: ``context``, ``timeout`` and ``error`` registry options

    Returns:
        A new ``HookRegistry``
    """
    return HookRegistry(mapping, options)

