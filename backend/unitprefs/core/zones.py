"""Convert alert-zone bounds into a path's preferred display unit."""

from __future__ import annotations

import logging
from typing import Iterable

from unitprefs.core.conversion.engine import UnitsEngine
from unitprefs.errors import UnitsError
from unitprefs.models.units import PathZones, Zone

logger = logging.getLogger(__name__)


class ZoneConverter:
    def __init__(self, engine: UnitsEngine) -> None:
        self.engine = engine

    def _bound(self, value: float | None, base_unit: str, target_unit: str) -> float | None:
        if value is None:
            return None
        try:
            converted = self.engine.convert_unit_value(base_unit, target_unit, value).converted_value
        except UnitsError as exc:
            logger.warning("Zone bound %s not converted from %s to %s: %s", value, base_unit, target_unit, exc)
            return value
        if isinstance(converted, bool) or not isinstance(converted, (int, float)):
            # duration and date targets produce strings; bounds stay numeric
            return value
        return converted

    def convert_zones(self, path: str, zones: Iterable[Zone | dict]) -> PathZones:
        zones = [z if isinstance(z, Zone) else Zone.model_validate(z) for z in zones]
        conversion = self.engine.get_conversion(path)
        base_unit = None if conversion.base_unit == "none" else conversion.base_unit
        target_unit = conversion.target_unit

        if not base_unit or base_unit == target_unit:
            converted = [z.model_copy() for z in zones]
        else:
            converted = [
                Zone(
                    state=z.state,
                    lower=self._bound(z.lower, base_unit, target_unit),
                    upper=self._bound(z.upper, base_unit, target_unit),
                    message=z.message,
                )
                for z in zones
            ]

        return PathZones(
            path=path,
            base_unit=base_unit,
            target_unit=target_unit,
            display_format=conversion.display_format,
            zones=converted,
            message=None if converted else "No zones defined for this path",
        )
