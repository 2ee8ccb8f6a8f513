"""Interfaces the engine reads its inputs through.

Everything is read fresh per call; the engine never keeps its own copy of
preferences or live telemetry beyond the metadata memo.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from unitprefs.models.units import BaseUnitDefinition, LiveMetadata, UnitMetadata, UnitsPreferences

ChangeHook = Callable[[], None]


class PreferenceProvider(Protocol):
    def get_preferences(self) -> UnitsPreferences: ...

    def get_unit_definitions(self) -> dict[str, BaseUnitDefinition]: ...


class BaseUnitDefaultsProvider(Protocol):
    def get_conversions_for_base_unit(self, base_unit: str) -> UnitMetadata | None: ...

    def get_category_to_base_unit_map(self) -> dict[str, str]: ...


class LiveMetadataProvider(Protocol):
    def get_metadata(self, path: str) -> LiveMetadata | None: ...

    def get_sample(self, path: str) -> Any: ...
