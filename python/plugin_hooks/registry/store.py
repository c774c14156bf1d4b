"""Storage for registered hook handlers."""

from typing import TYPE_CHECKING, Dict, List, MutableMapping, Optional

if TYPE_CHECKING:
    from .models import HandlerEntry

MapCollection = Dict[str, List["HandlerEntry"]]


class RegistryStore:
    """Mapping of map-name to keyed handler collections.

    The backing mapping may be supplied by the caller, which lets several
    registries share storage or lets callers inspect it. Collections are
    created lazily and never removed.
    """

    def __init__(
        self, mapping: Optional[MutableMapping[str, MapCollection]] = None
    ) -> None:
        self._maps: MutableMapping[str, MapCollection] = (
            mapping if mapping is not None else {}
        )

    @property
    def maps(self) -> MutableMapping[str, MapCollection]:
        """The backing mapping, as passed in at construction."""
        return self._maps

    def ensure_map(self, name: str) -> MapCollection:
        """Return the collection for ``name``, creating an empty one if absent."""
        if name not in self._maps:
            self._maps[name] = {}
        return self._maps[name]
