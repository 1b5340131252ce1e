from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from poi_api.api.deps import get_poi_service
from poi_api.core.config import settings
from poi_api.domain.poi import POI
from poi_api.schemas.poi import MessageOut, PoiPage, PoiSummaryOut
from poi_api.services.poi import PoiService

router = APIRouter(prefix=f"{settings.API_PREFIX}/pois", tags=["POI"])


def positive_int(value: Optional[str], default: int) -> int:
    """Parse a query parameter; anything that is not a positive integer falls back to ``default``."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@router.post(
    "/",
    response_model=PoiSummaryOut,
    status_code=201,
    summary="Create a POI",
    description="Creates a POI together with its optional address and opening hours in one transaction."
)
async def create_poi(
    payload: Any = Body(None),
    service: PoiService = Depends(get_poi_service)
):
    return await service.create_poi(payload)


@router.get(
    "/",
    response_model=PoiPage,
    summary="List POIs",
    description="Returns one page of fully hydrated POIs with pagination metadata."
)
async def list_pois(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: PoiService = Depends(get_poi_service)
):
    """Page and limit default to 1 and the configured page size."""
    return await service.list_pois(
        positive_int(page, 1),
        positive_int(limit, settings.DEFAULT_PAGE_LIMIT),
    )


@router.get(
    "/{poi_id}",
    response_model=POI,
    summary="Get a POI by ID",
    description="Returns the POI with its address, opening hours and pump / fuel product / price tree."
)
async def get_poi(
    poi_id: str,
    service: PoiService = Depends(get_poi_service)
):
    return await service.get_poi(poi_id)


@router.put(
    "/{poi_id}",
    response_model=POI,
    summary="Update a POI",
    description="Partial update: name/status, address upsert and opening-hours replacement in one transaction."
)
async def update_poi(
    poi_id: str,
    payload: Any = Body(None),
    service: PoiService = Depends(get_poi_service)
):
    return await service.update_poi(poi_id, payload)


@router.delete(
    "/{poi_id}",
    response_model=MessageOut,
    summary="Delete a POI",
    description="Deletes the POI; the store cascades the delete to every owned entity."
)
async def delete_poi(
    poi_id: str,
    service: PoiService = Depends(get_poi_service)
):
    await service.delete_poi(poi_id)
    return {"message": "POI deleted successfully"}


@router.patch(
    "/{poi_id}/status",
    response_model=POI,
    summary="Change POI status",
    description="Sets the status to ONLINE, OFFLINE or MAINTENANCE."
)
async def update_poi_status(
    poi_id: str,
    payload: Any = Body(None),
    service: PoiService = Depends(get_poi_service)
):
    return await service.update_poi_status(poi_id, payload)
