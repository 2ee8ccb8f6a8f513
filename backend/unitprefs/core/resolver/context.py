"""Per-call view over the providers, shared by all resolution strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from unitprefs.core.providers import BaseUnitDefaultsProvider, LiveMetadataProvider
from unitprefs.models.units import (
    BaseUnitDefinition,
    ConversionDefinition,
    LiveMetadata,
    UnitMetadata,
    UnitsPreferences,
)

logger = logging.getLogger(__name__)


def last_segment(path: str) -> str:
    return path.rsplit(".", 1)[-1].lower()


def names_in_segment(segment: str, names: list[str]) -> list[str]:
    """Names contained (case-insensitively) in ``segment``, longest first.

    A name that only matched as part of a longer matched name is dropped, so
    ``"fuelVolumeRate"`` names ``volumeRate`` and not also ``volume``.
    """
    hits = [n for n in names if n.lower() in segment]
    hits.sort(key=lambda n: (-len(n), n))
    kept: list[str] = []
    for name in hits:
        if not any(name.lower() in longer.lower() for longer in kept):
            kept.append(name)
    return kept


@dataclass
class ResolutionContext:
    preferences: UnitsPreferences
    definitions: dict[str, BaseUnitDefinition]
    defaults: BaseUnitDefaultsProvider
    live: LiveMetadataProvider | None = None
    known: Mapping[str, UnitMetadata] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._category_map = self.defaults.get_category_to_base_unit_map()

    # ── Lookups ──────────────────────────────────────────────────────────

    def builtin(self, base_unit: str) -> UnitMetadata | None:
        return self.defaults.get_conversions_for_base_unit(base_unit)

    def live_metadata(self, path: str) -> LiveMetadata | None:
        return self.live.get_metadata(path) if self.live is not None else None

    def known_categories(self) -> list[str]:
        names = set(self._category_map)
        names.update(self.preferences.categories)
        names.update(d.category for d in self.definitions.values() if d.category)
        return sorted(names)

    def is_known_base_unit(self, base_unit: str) -> bool:
        return (
            base_unit in self._category_map.values()
            or base_unit in self.definitions
            or self.builtin(base_unit) is not None
        )

    def base_unit_for_category(self, category: str) -> str | None:
        pref = self.preferences.categories.get(category)
        if pref is not None and pref.base_unit:
            return pref.base_unit
        if category in self._category_map:
            return self._category_map[category]
        for base_unit in sorted(self.definitions):
            if self.definitions[base_unit].category == category:
                return base_unit
        return None

    def categories_for_base_unit(self, base_unit: str) -> list[str]:
        found = {cat for cat, unit in self._category_map.items() if unit == base_unit}
        found.update(
            cat for cat, pref in self.preferences.categories.items() if pref.base_unit == base_unit
        )
        custom = self.definitions.get(base_unit)
        if custom is not None and custom.category:
            found.add(custom.category)
        return sorted(found)

    def category_for_base_unit(self, base_unit: str, path: str | None = None) -> str | None:
        """Pick the category for ``base_unit``, deterministically.

        One candidate: that one. Several: the one named in the path's last
        segment (longest name wins). Otherwise the lexicographically first.
        """
        candidates = self.categories_for_base_unit(base_unit)
        if not candidates:
            builtin = self.builtin(base_unit)
            return builtin.category if builtin is not None else None
        if len(candidates) == 1:
            return candidates[0]
        if path:
            named = names_in_segment(last_segment(path), candidates)
            if named:
                logger.debug("Base unit %s on %s -> category %s (path name)", base_unit, path, named[0])
                return named[0]
        return candidates[0]

    def merged_conversions(self, base_unit: str) -> dict[str, ConversionDefinition]:
        """Built-in conversions overlaid with custom ones; custom wins on key collision."""
        conversions: dict[str, ConversionDefinition] = {}
        builtin = self.builtin(base_unit)
        if builtin is not None:
            conversions.update(builtin.conversions)
        custom = self.definitions.get(base_unit)
        if custom is not None:
            conversions.update({k: v.model_copy() for k, v in custom.conversions.items()})
        return conversions

    def build(self, base_unit: str, category: str | None, path: str | None = None) -> UnitMetadata:
        return UnitMetadata(
            base_unit=base_unit,
            category=category or self.category_for_base_unit(base_unit, path) or "custom",
            conversions=self.merged_conversions(base_unit),
        )
