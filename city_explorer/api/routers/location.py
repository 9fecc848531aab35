from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from city_explorer.api.deps import get_location_resolver
from city_explorer.api.rate_limit import enforce_rate_limit
from city_explorer.dto import LocationDTO
from city_explorer.schemas.common import ErrorResponse
from city_explorer.services.locations import LocationResolver

router = APIRouter(
    prefix="/location", tags=["location"], dependencies=[Depends(enforce_rate_limit)]
)


@router.get(
    "",
    response_model=LocationDTO,
    responses={500: {"model": ErrorResponse}},
    summary="Resolve a search string to a location",
    description="Returns the stored location for the query, geocoding and storing it on first use.",
)
async def get_location(
    data: str = Query(..., min_length=1, description="Free-form location query, e.g. Seattle"),
    resolver: LocationResolver = Depends(get_location_resolver),
):
    location = await resolver.resolve(data)
    return LocationDTO.model_validate(location, from_attributes=True)
