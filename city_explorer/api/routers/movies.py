from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from city_explorer.api.deps import get_location_from_query, get_movie_resolver
from city_explorer.api.rate_limit import enforce_rate_limit
from city_explorer.dto import LocationQueryDTO, MovieDTO
from city_explorer.schemas.common import ErrorResponse
from city_explorer.services.movies import MovieResolver

router = APIRouter(
    prefix="/movies", tags=["movies"], dependencies=[Depends(enforce_rate_limit)]
)


@router.get(
    "",
    response_model=list[MovieDTO],
    responses={500: {"model": ErrorResponse}},
    summary="Top rated movies for a location's region",
)
async def get_movies(
    location: LocationQueryDTO = Depends(get_location_from_query),
    resolver: MovieResolver = Depends(get_movie_resolver),
):
    if not location.formatted_query:
        raise HTTPException(status_code=422, detail="location formatted_query required")
    rows = await resolver.resolve(location.to_record())
    return [MovieDTO.model_validate(row, from_attributes=True) for row in rows]
