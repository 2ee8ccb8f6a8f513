"""Unit metadata, preferences and conversion responses.

Field names are snake_case in Python and camelCase on the wire
(``inverseFormula``, ``pathOverrides`` ...); both spellings are accepted on
input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ValueKind(str, Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    DATE = "date"
    OBJECT = "object"
    UNKNOWN = "unknown"


class ConversionDefinition(CamelModel):
    """How to get from a base unit to one target unit."""

    formula: str | None = None
    inverse_formula: str | None = None
    symbol: str = ""
    long_name: str | None = None
    date_format: str | None = None
    use_local_time: bool | None = None


IDENTITY = ConversionDefinition(formula="value", inverse_formula="value", symbol="")


class UnitMetadata(CamelModel):
    base_unit: str | None = None
    category: str = "custom"
    conversions: dict[str, ConversionDefinition] = {}


class BaseUnitDefinition(CamelModel):
    """A custom conversion table for one base unit."""

    base_unit: str | None = None
    category: str | None = None
    long_name: str | None = None
    conversions: dict[str, ConversionDefinition] = {}


class CategoryPreference(CamelModel):
    target_unit: str | None = None
    display_format: str | None = None
    base_unit: str | None = None


class PathOverride(CategoryPreference):
    path: str | None = None
    category: str | None = None


class PathPatternRule(CamelModel):
    pattern: str
    category: str
    base_unit: str | None = None
    target_unit: str | None = None
    display_format: str | None = None
    priority: int = 0

    @field_validator("pattern")
    @classmethod
    def pattern_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Pattern cannot be empty")
        return v.strip()


class UnitsPreferences(CamelModel):
    categories: dict[str, CategoryPreference] = {}
    path_overrides: dict[str, PathOverride] = {}
    path_patterns: list[PathPatternRule] = []


class LiveMetadata(CamelModel):
    """What live telemetry reports about a path. ``value`` is the last sample seen."""

    units: str | None = None
    description: str | None = None
    value: Any = None


class ConversionResponse(CamelModel):
    path: str
    base_unit: str | None
    target_unit: str
    formula: str
    inverse_formula: str
    display_format: str
    symbol: str = ""
    category: str
    value_type: ValueKind = ValueKind.UNKNOWN
    date_format: str | None = None
    use_local_time: bool | None = None
    display_name: str | None = None
    description: str | None = None


# ── Alert zones ──────────────────────────────────────────────────────────────

class Zone(CamelModel):
    state: str
    lower: float | None = None
    upper: float | None = None
    message: str | None = None


class PathZones(CamelModel):
    path: str
    base_unit: str | None
    target_unit: str
    display_format: str
    zones: list[Zone] = []
    message: str | None = None
