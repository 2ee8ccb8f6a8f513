"""In-memory owner of unit preferences and custom unit definitions.

Every mutator fires the registered change hooks before returning, so a
metadata memo bound with :meth:`on_change` can never serve stale entries.
"""

from __future__ import annotations

import logging

from unitprefs.core.providers import ChangeHook
from unitprefs.models.units import (
    BaseUnitDefinition,
    CategoryPreference,
    PathOverride,
    PathPatternRule,
    UnitsPreferences,
)

logger = logging.getLogger(__name__)


def default_preferences() -> UnitsPreferences:
    """The preferences a fresh installation starts with."""
    return UnitsPreferences(
        categories={
            "speed": CategoryPreference(target_unit="knots", display_format="0.0"),
            "temperature": CategoryPreference(target_unit="celsius", display_format="0"),
            "pressure": CategoryPreference(target_unit="hPa", display_format="0"),
            "distance": CategoryPreference(target_unit="nm", display_format="0.0"),
            "depth": CategoryPreference(target_unit="m", display_format="0.0"),
            "length": CategoryPreference(target_unit="m", display_format="0.0"),
            "angle": CategoryPreference(target_unit="deg", display_format="0"),
            "angularVelocity": CategoryPreference(target_unit="deg/min", display_format="0"),
            "volume": CategoryPreference(target_unit="L", display_format="0"),
            "volumeRate": CategoryPreference(target_unit="L/h", display_format="0.0"),
            "voltage": CategoryPreference(target_unit="V", display_format="0.00"),
            "current": CategoryPreference(target_unit="A", display_format="0.0"),
            "power": CategoryPreference(target_unit="W", display_format="0"),
            "energy": CategoryPreference(target_unit="kWh", display_format="0.00"),
            "charge": CategoryPreference(target_unit="Ah", display_format="0"),
            "frequency": CategoryPreference(target_unit="rpm", display_format="0"),
            "time": CategoryPreference(target_unit="duration-hms", display_format="0"),
            "percentage": CategoryPreference(target_unit="percent", display_format="0"),
            "mass": CategoryPreference(target_unit="kg", display_format="0.0"),
            "area": CategoryPreference(target_unit="m2", display_format="0.0"),
            "dateTime": CategoryPreference(target_unit="short-date-24hrs-local", display_format="0"),
            "epoch": CategoryPreference(target_unit="short-date-24hrs-local", display_format="0"),
            "boolean": CategoryPreference(target_unit="bool", display_format="0"),
        },
        path_patterns=[
            PathPatternRule(pattern="*.temperature", category="temperature",
                            target_unit="celsius", display_format="0", priority=100),
            PathPatternRule(pattern="*.pressure", category="pressure",
                            target_unit="hPa", display_format="0", priority=100),
            PathPatternRule(pattern="*.speed*", category="speed",
                            target_unit="knots", display_format="0.0", priority=90),
            PathPatternRule(pattern="**.timeEpoch", category="epoch", base_unit="Epoch Seconds",
                            target_unit="time-am/pm-local", priority=100),
        ],
    )


class PreferenceStore:
    """Holds preferences and custom per-base-unit conversion tables."""

    def __init__(
        self,
        preferences: UnitsPreferences | None = None,
        definitions: dict[str, BaseUnitDefinition] | None = None,
    ) -> None:
        self._preferences = preferences if preferences is not None else default_preferences()
        self._definitions: dict[str, BaseUnitDefinition] = dict(definitions or {})
        self._hooks: list[ChangeHook] = []

    # ── Reads (PreferenceProvider) ───────────────────────────────────────

    def get_preferences(self) -> UnitsPreferences:
        return self._preferences

    def get_unit_definitions(self) -> dict[str, BaseUnitDefinition]:
        return self._definitions

    # ── Change notification ──────────────────────────────────────────────

    def on_change(self, hook: ChangeHook) -> None:
        self._hooks.append(hook)

    def _changed(self, what: str) -> None:
        logger.debug("Preferences changed (%s), notifying %d hook(s)", what, len(self._hooks))
        for hook in self._hooks:
            hook()

    # ── Mutators ─────────────────────────────────────────────────────────

    def replace(self, preferences: UnitsPreferences) -> None:
        self._preferences = preferences
        self._changed("all preferences")

    def set_category(self, category: str, preference: CategoryPreference) -> None:
        self._preferences.categories[category] = preference
        self._changed(f"category {category}")

    def delete_category(self, category: str) -> None:
        if self._preferences.categories.pop(category, None) is not None:
            self._changed(f"category {category}")

    def set_path_override(self, path: str, override: PathOverride) -> None:
        if override.path is None:
            override = override.model_copy(update={"path": path})
        self._preferences.path_overrides[path] = override
        self._changed(f"override {path}")

    def delete_path_override(self, path: str) -> None:
        if self._preferences.path_overrides.pop(path, None) is not None:
            self._changed(f"override {path}")

    def set_path_patterns(self, rules: list[PathPatternRule]) -> None:
        self._preferences.path_patterns = list(rules)
        self._changed("path patterns")

    def add_path_pattern(self, rule: PathPatternRule) -> None:
        self._preferences.path_patterns.append(rule)
        self._changed(f"pattern {rule.pattern}")

    def set_unit_definition(self, base_unit: str, definition: BaseUnitDefinition) -> None:
        self._definitions[base_unit] = definition
        self._changed(f"unit definition {base_unit}")

    def delete_unit_definition(self, base_unit: str) -> None:
        if self._definitions.pop(base_unit, None) is not None:
            self._changed(f"unit definition {base_unit}")
