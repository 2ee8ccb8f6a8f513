"""Resolution stages, in precedence order.

Each strategy returns metadata for the path or None to let the next stage
try. They hold no state; everything comes from the ResolutionContext.
"""

from __future__ import annotations

import logging
from typing import Protocol

from unitprefs.core.patterns.matcher import find_matching_pattern
from unitprefs.core.resolver.context import ResolutionContext, last_segment, names_in_segment
from unitprefs.models.units import UnitMetadata

logger = logging.getLogger(__name__)


class ResolutionStrategy(Protocol):
    name: str

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None: ...


class KnownMetadataStrategy:
    """Metadata defined up front for an exact path."""

    name = "known"

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None:
        meta = ctx.known.get(path)
        return meta.model_copy(deep=True) if meta is not None else None


class PathOverrideStrategy:
    """A per-path override naming a base unit, a category, or both."""

    name = "override"

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None:
        override = ctx.preferences.path_overrides.get(path)
        if override is None:
            return None
        base_unit = override.base_unit
        if not base_unit and override.category:
            base_unit = ctx.base_unit_for_category(override.category)
        if not base_unit:
            return None
        return ctx.build(base_unit, override.category, path)


class PatternRuleStrategy:
    """The highest-priority wildcard rule matching the path."""

    name = "pattern"

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None:
        rule = find_matching_pattern(path, ctx.preferences.path_patterns)
        if rule is None:
            return None
        base_unit = rule.base_unit or ctx.base_unit_for_category(rule.category)
        if not base_unit:
            logger.debug("Pattern %s: no base unit for category %s", rule.pattern, rule.category)
            return None
        if not ctx.is_known_base_unit(base_unit):
            logger.debug("Pattern %s: no conversions known for %s", rule.pattern, base_unit)
            return None
        return ctx.build(base_unit, rule.category, path)


class LiveUnitsStrategy:
    """The unit string live telemetry reports for the path.

    Unrecognized units still produce metadata, with the literal string as
    the base unit and whatever custom conversions exist for it.
    """

    name = "live"

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None:
        live = ctx.live_metadata(path)
        if live is None or not live.units:
            return None
        return ctx.build(live.units, None, path)


class PathNameStrategy:
    """Infer the category from the path's last segment, e.g. ``engineTemperature``."""

    name = "path-name"

    def resolve(self, path: str, ctx: ResolutionContext) -> UnitMetadata | None:
        named = names_in_segment(last_segment(path), ctx.known_categories())
        if len(named) != 1:
            return None
        category = named[0]
        base_unit = ctx.base_unit_for_category(category)
        if not base_unit:
            return None
        return ctx.build(base_unit, category, path)


def default_strategies() -> list[ResolutionStrategy]:
    return [
        KnownMetadataStrategy(),
        PathOverrideStrategy(),
        PatternRuleStrategy(),
        LiveUnitsStrategy(),
        PathNameStrategy(),
    ]
