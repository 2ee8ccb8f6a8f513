"""Path -> metadata memo.

The only mutable state the engine keeps. Whoever owns preferences must call
:meth:`MetadataCache.invalidate` whenever they change; a stale entry would
otherwise keep serving an outdated conversion.
"""

from __future__ import annotations

import logging

from unitprefs.models.units import UnitMetadata

logger = logging.getLogger(__name__)


class MetadataCache:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: dict[str, UnitMetadata] = {}

    def get(self, path: str) -> UnitMetadata | None:
        """Return a private copy of the cached entry, if any."""
        entry = self._entries.get(path)
        return entry.model_copy(deep=True) if entry is not None else None

    def put(self, path: str, metadata: UnitMetadata) -> None:
        if self.enabled:
            self._entries[path] = metadata.model_copy(deep=True)

    def invalidate(self, path: str | None = None) -> None:
        """Drop one path, or everything when ``path`` is None."""
        if path is None:
            logger.debug("Metadata cache cleared (%d entries)", len(self._entries))
            self._entries.clear()
        else:
            self._entries.pop(path, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries
