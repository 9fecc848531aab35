from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from city_explorer.api.deps import get_yelp_resolver
from city_explorer.api.rate_limit import enforce_rate_limit
from city_explorer.dto import YelpDTO
from city_explorer.repositories.interfaces import LocationRecord
from city_explorer.schemas.common import ErrorResponse
from city_explorer.services.yelp import YelpResolver

router = APIRouter(
    prefix="/yelp", tags=["yelp"], dependencies=[Depends(enforce_rate_limit)]
)


@router.get(
    "",
    response_model=list[YelpDTO],
    responses={500: {"model": ErrorResponse}},
    summary="Businesses near a location",
)
async def get_yelp(
    location_id: int = Query(..., description="ID returned by /location"),
    search_query: str = Query(..., min_length=1, description="Original search string"),
    resolver: YelpResolver = Depends(get_yelp_resolver),
):
    rows = await resolver.resolve(LocationRecord(id=location_id, search_query=search_query))
    return [YelpDTO.model_validate(row, from_attributes=True) for row in rows]
