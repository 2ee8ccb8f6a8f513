"""Unit strings and last-seen samples reported by live telemetry."""

from __future__ import annotations

from typing import Any, Mapping

from unitprefs.models.units import LiveMetadata


class LiveMetadataStore:
    def __init__(self, initial: Mapping[str, LiveMetadata] | None = None) -> None:
        self._entries: dict[str, LiveMetadata] = dict(initial or {})

    def update(self, entries: Mapping[str, LiveMetadata | dict]) -> int:
        """Merge ``entries`` over what is already known. Returns the count merged."""
        for path, entry in entries.items():
            self._entries[path] = (
                entry if isinstance(entry, LiveMetadata) else LiveMetadata.model_validate(entry)
            )
        return len(entries)

    def get_metadata(self, path: str) -> LiveMetadata | None:
        return self._entries.get(path)

    def get_sample(self, path: str) -> Any:
        entry = self._entries.get(path)
        return entry.value if entry is not None else None

    def paths(self) -> list[str]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
