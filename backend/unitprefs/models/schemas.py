"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from unitprefs.models.units import CamelModel, LiveMetadata, Zone


class ConvertRequest(CamelModel):
    base_unit: str
    target_unit: str
    value: Any
    display_format: str | None = None
    use_local_time: bool | None = None

    @field_validator("base_unit", "target_unit")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Unit cannot be empty")
        return v


class MetadataUpdate(BaseModel):
    metadata: dict[str, LiveMetadata]


class MetadataUpdateResponse(BaseModel):
    success: bool
    count: int


class ZonesRequest(BaseModel):
    zones: list[Zone] = []
