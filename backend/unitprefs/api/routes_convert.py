"""Ad-hoc conversions and live metadata ingestion."""

from fastapi import APIRouter, Depends

from unitprefs.api.deps import Services, get_services
from unitprefs.models.schemas import ConvertRequest, MetadataUpdate, MetadataUpdateResponse

router = APIRouter(tags=["convert"])


@router.post("/convert")
async def convert(req: ConvertRequest, services: Services = Depends(get_services)):
    """Convert one value between two units. Unknown units map to 404."""
    result = services.engine.convert_unit_value(
        req.base_unit,
        req.target_unit,
        req.value,
        display_format=req.display_format,
        use_local_time=req.use_local_time,
    )
    return result.to_dict()


@router.post("/metadata", response_model=MetadataUpdateResponse)
async def push_metadata(req: MetadataUpdate, services: Services = Depends(get_services)):
    """Merge live unit metadata reported by telemetry clients."""
    count = services.live.update(req.metadata)
    services.engine.invalidate()
    return MetadataUpdateResponse(success=True, count=count)
