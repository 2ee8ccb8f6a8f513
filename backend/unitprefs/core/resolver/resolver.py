"""Resolve a path to its base unit, category and available conversions."""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Sequence

from unitprefs.core.providers import (
    BaseUnitDefaultsProvider,
    ChangeHook,
    LiveMetadataProvider,
    PreferenceProvider,
)
from unitprefs.core.resolver.cache import MetadataCache
from unitprefs.core.resolver.context import ResolutionContext
from unitprefs.core.resolver.strategies import KnownMetadataStrategy, ResolutionStrategy, default_strategies
from unitprefs.models.units import UnitMetadata

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Runs the resolution strategies in order, stopping at the first hit.

    Results from every stage except explicit known metadata are memoized per
    path. Call :meth:`bind` with the preference owner's hook registration so
    the memo is cleared on every preference change.
    """

    def __init__(
        self,
        preferences: PreferenceProvider,
        defaults: BaseUnitDefaultsProvider,
        live: LiveMetadataProvider | None = None,
        known: Mapping[str, UnitMetadata] | None = None,
        cache: MetadataCache | None = None,
        strategies: Sequence[ResolutionStrategy] | None = None,
    ) -> None:
        self.preferences = preferences
        self.defaults = defaults
        self.live = live
        self.known = dict(known or {})
        self.cache = cache if cache is not None else MetadataCache()
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    def bind(self, register: Callable[[ChangeHook], None]) -> None:
        register(self.invalidate)

    def invalidate(self) -> None:
        self.cache.invalidate()

    def context(self) -> ResolutionContext:
        return ResolutionContext(
            preferences=self.preferences.get_preferences(),
            definitions=self.preferences.get_unit_definitions(),
            defaults=self.defaults,
            live=self.live,
            known=self.known,
        )

    def resolve(self, path: str, ctx: ResolutionContext | None = None) -> UnitMetadata | None:
        cached = self.cache.get(path)
        if cached is not None:
            return cached

        ctx = ctx or self.context()
        for strategy in self.strategies:
            meta = strategy.resolve(path, ctx)
            if meta is None:
                continue
            logger.debug("Resolved %s via %s: %s (%s)", path, strategy.name, meta.base_unit, meta.category)
            if not isinstance(strategy, KnownMetadataStrategy):
                self.cache.put(path, meta)
            return meta.model_copy(deep=True)

        logger.debug("No metadata for %s", path)
        return None
