"""Hook registry system."""

from .decorators import create_hook_decorator
from .models import HandlerEntry, HandlerRunner, HookOptions, RegistryOptions
from .registry import HookRegistry, create, replaces_result
from .store import MapCollection, RegistryStore

__all__ = [
    "HandlerEntry",
    "HandlerRunner",
    "HookOptions",
    "HookRegistry",
    "MapCollection",
    "RegistryOptions",
    "RegistryStore",
    "create",
    "create_hook_decorator",
    "replaces_result",
]
