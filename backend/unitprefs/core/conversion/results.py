"""Plain result objects returned by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from unitprefs.models.units import ValueKind


@dataclass
class ConversionMetadata:
    units: str
    display_format: str
    description: str
    original_units: str
    display_name: str | None = None

    def to_dict(self) -> dict:
        out = {
            "units": self.units,
            "displayFormat": self.display_format,
            "description": self.description,
            "originalUnits": self.original_units,
        }
        if self.display_name is not None:
            out["displayName"] = self.display_name
        return out


@dataclass
class ConversionResult:
    converted: Any
    formatted: str
    original: Any
    metadata: ConversionMetadata

    def to_dict(self) -> dict:
        return {
            "converted": self.converted,
            "formatted": self.formatted,
            "original": self.original,
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class UnitConversionResult:
    converted_value: Any
    formatted: str
    symbol: str
    display_format: str
    value_type: ValueKind
    date_format: str | None = None
    use_local_time: bool | None = None

    def to_dict(self) -> dict:
        out = {
            "convertedValue": self.converted_value,
            "formatted": self.formatted,
            "symbol": self.symbol,
            "displayFormat": self.display_format,
            "valueType": self.value_type.value,
        }
        if self.date_format is not None:
            out["dateFormat"] = self.date_format
        if self.use_local_time is not None:
            out["useLocalTime"] = self.use_local_time
        return out


@dataclass
class Executed:
    """What the executor produced for one value, before it is wrapped for a caller."""

    converted: Any
    formatted: str
    value_type: ValueKind
    display_format: str
    date_format: str | None = None
    use_local_time: bool | None = None
