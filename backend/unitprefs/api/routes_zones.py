from fastapi import APIRouter, Depends

from unitprefs.api.deps import Services, get_services
from unitprefs.models.schemas import ZonesRequest

router = APIRouter(tags=["zones"])


@router.post("/zones/{path}")
async def convert_zones(path: str, req: ZonesRequest, services: Services = Depends(get_services)):
    """Alert zones for a path, with bounds in the path's display unit."""
    return services.zones.convert_zones(path, req.zones).to_json_dict()
