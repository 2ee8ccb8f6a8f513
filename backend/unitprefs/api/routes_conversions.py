"""Per-path conversion metadata, optionally with a converted value."""

from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends

from unitprefs.api.deps import Services, get_services

router = APIRouter(tags=["conversions"])


def parse_query_value(raw: str) -> Any:
    """Number first, then JSON (booleans, objects, quoted strings), then the raw text."""
    try:
        return float(raw)
    except ValueError:
        pass
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@router.get("/conversions/{path}")
async def get_conversion(path: str, value: Optional[str] = None, services: Services = Depends(get_services)):
    """Conversion info for a path; with ``?value=`` also convert that value."""
    info = services.engine.get_conversion(path).to_json_dict()
    if value is None:
        return info
    result = services.engine.convert_path_value(path, parse_query_value(value))
    return {**info, "result": result.to_dict()}
