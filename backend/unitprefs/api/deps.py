"""Process-wide engine wiring. Tests override :func:`get_services`."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from unitprefs.config import Settings, settings
from unitprefs.core.conversion.engine import UnitsEngine
from unitprefs.core.defaults import BuiltinDefaults
from unitprefs.core.live_metadata import LiveMetadataStore
from unitprefs.core.preferences import PreferenceStore
from unitprefs.core.zones import ZoneConverter


@dataclass
class Services:
    store: PreferenceStore
    defaults: BuiltinDefaults
    live: LiveMetadataStore
    engine: UnitsEngine
    zones: ZoneConverter


def build_services(
    config: Settings = settings,
    store: PreferenceStore | None = None,
    live: LiveMetadataStore | None = None,
) -> Services:
    store = store or PreferenceStore()
    live = live or LiveMetadataStore()
    defaults = BuiltinDefaults()
    engine = UnitsEngine(
        store,
        defaults,
        live,
        defaults.known_path_metadata(),
        default_display_format=config.default_display_format,
        local_timezone=config.local_timezone,
        cache_enabled=config.metadata_cache_enabled,
    )
    engine.bind(store.on_change)
    return Services(store, defaults, live, engine, ZoneConverter(engine))


@lru_cache
def get_services() -> Services:
    return build_services()
