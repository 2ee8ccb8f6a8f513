"""Pick the one conversion a path's value should go through."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from unitprefs.core.date_formats import strip_local_suffix
from unitprefs.core.patterns.matcher import find_matching_pattern
from unitprefs.core.providers import BaseUnitDefaultsProvider
from unitprefs.models.units import (
    IDENTITY,
    BaseUnitDefinition,
    CategoryPreference,
    ConversionDefinition,
    UnitMetadata,
    UnitsPreferences,
)

logger = logging.getLogger(__name__)

NONE_UNIT = "none"


@dataclass(frozen=True)
class SelectedConversion:
    base_unit: str
    target_unit: str
    conversion: ConversionDefinition
    category: str
    display_format: str
    pass_through: bool = False

    @property
    def symbol(self) -> str:
        return self.conversion.symbol or ""

    @property
    def formula(self) -> str:
        return self.conversion.formula or "value"

    @property
    def inverse_formula(self) -> str:
        return self.conversion.inverse_formula or "value"

    @property
    def is_identity(self) -> bool:
        return (
            self.target_unit == self.base_unit
            and not self.conversion.date_format
            and self.formula == "value"
        )


def find_preference(path: str, category: str | None, preferences: UnitsPreferences) -> CategoryPreference | None:
    """Override for the exact path, then the winning pattern rule, then the category.

    Only the highest-priority matching rule is consulted, the same one the
    resolver takes metadata from. Without a target of its own it defers to
    its category's preference.
    """
    override = preferences.path_overrides.get(path)
    if override is not None and override.target_unit:
        if not override.display_format and category in preferences.categories:
            return override.model_copy(
                update={"display_format": preferences.categories[category].display_format}
            )
        return override

    rule = find_matching_pattern(path, preferences.path_patterns)
    if rule is not None and rule.target_unit:
        display_format = rule.display_format
        if not display_format and rule.category in preferences.categories:
            display_format = preferences.categories[rule.category].display_format
        return CategoryPreference(
            target_unit=rule.target_unit, display_format=display_format, base_unit=rule.base_unit
        )
    if rule is not None and rule.category in preferences.categories:
        return preferences.categories[rule.category]

    if category:
        return preferences.categories.get(category)
    return None


def find_conversion(
    conversions: dict[str, ConversionDefinition] | None, target: str
) -> tuple[str, ConversionDefinition] | None:
    """Exact key first, then a case-insensitive ``long_name`` match."""
    if not conversions:
        return None
    if target in conversions:
        return target, conversions[target]
    wanted = target.lower()
    for key, conv in conversions.items():
        if conv.long_name and conv.long_name.lower() == wanted:
            return key, conv
    return None


def lookup_target(
    target: str,
    sources: list[dict[str, ConversionDefinition] | None],
) -> tuple[str, ConversionDefinition] | None:
    """Search each table in turn; a ``-local`` target may match its UTC twin."""
    for conversions in sources:
        found = find_conversion(conversions, target)
        if found is not None:
            return found
    stripped, is_local = strip_local_suffix(target)
    if is_local:
        for conversions in sources:
            found = find_conversion(conversions, stripped)
            if found is not None:
                return target, found[1]
    return None


def pass_through(
    base_unit: str | None, category: str | None, display_format: str
) -> SelectedConversion:
    unit = base_unit or NONE_UNIT
    return SelectedConversion(
        base_unit=unit,
        target_unit=unit,
        conversion=IDENTITY,
        category=category or NONE_UNIT,
        display_format=display_format,
        pass_through=True,
    )


def select_conversion(
    path: str,
    metadata: UnitMetadata | None,
    preference: CategoryPreference | None,
    definitions: dict[str, BaseUnitDefinition],
    defaults: BaseUnitDefaultsProvider,
    default_display_format: str,
    literal_units: str | None = None,
) -> SelectedConversion:
    display_format = (preference.display_format if preference else None) or default_display_format

    if metadata is None or not metadata.base_unit:
        return pass_through(literal_units, None, display_format)

    base_unit = metadata.base_unit
    target = preference.target_unit if preference else None
    if not target:
        return pass_through(base_unit, metadata.category, display_format)

    custom = definitions.get(base_unit)
    builtin = defaults.get_conversions_for_base_unit(base_unit)
    found = lookup_target(target, [
        metadata.conversions,
        custom.conversions if custom else None,
        builtin.conversions if builtin else None,
    ])

    if found is not None and found[1].formula:
        key, conv = found
        return SelectedConversion(
            base_unit=base_unit,
            target_unit=key,
            conversion=conv,
            category=metadata.category,
            display_format=display_format,
        )

    if target == base_unit:
        return SelectedConversion(
            base_unit=base_unit,
            target_unit=base_unit,
            conversion=IDENTITY.model_copy(update={"symbol": base_unit}),
            category=metadata.category,
            display_format=display_format,
        )

    logger.debug("No conversion %s -> %s for %s, passing through", base_unit, target, path)
    return pass_through(base_unit, metadata.category, display_format)
