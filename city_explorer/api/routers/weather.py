from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from city_explorer.api.deps import get_location_from_query, get_weather_resolver
from city_explorer.api.rate_limit import enforce_rate_limit
from city_explorer.dto import LocationQueryDTO, WeatherDTO
from city_explorer.schemas.common import ErrorResponse
from city_explorer.services.weather import WeatherResolver

router = APIRouter(
    prefix="/weather", tags=["weather"], dependencies=[Depends(enforce_rate_limit)]
)


@router.get(
    "",
    response_model=list[WeatherDTO],
    responses={500: {"model": ErrorResponse}},
    summary="Daily forecast for a location",
)
async def get_weather(
    location: LocationQueryDTO = Depends(get_location_from_query),
    resolver: WeatherResolver = Depends(get_weather_resolver),
):
    if location.latitude is None or location.longitude is None:
        raise HTTPException(status_code=422, detail="location latitude/longitude required")
    rows = await resolver.resolve(location.to_record())
    return [WeatherDTO.model_validate(row, from_attributes=True) for row in rows]
