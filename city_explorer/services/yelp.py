from __future__ import annotations

from typing import Protocol

from city_explorer.core.exceptions import ValidationError
from city_explorer.infra.unit_of_work import UnitOfWork
from city_explorer.providers.yelp import Business, normalize_business
from city_explorer.repositories.interfaces import (
    LocationRecord,
    LocationScopedRepository,
    YelpRecord,
)
from city_explorer.services.resources import LocationScopedResolver


class BusinessSearch(Protocol):
    async def search(self, location: str) -> list[Business]: ...


class YelpResolver(LocationScopedResolver[YelpRecord]):
    """Businesses near the location, searched by the raw query string."""

    entity = "yelp"

    def __init__(self, uow_factory, businesses: BusinessSearch, **kwargs) -> None:
        super().__init__(uow_factory, **kwargs)
        self._businesses = businesses

    def _repository(self, uow: UnitOfWork) -> LocationScopedRepository[YelpRecord]:
        return uow.yelps

    async def _fetch(self, location: LocationRecord) -> list[YelpRecord]:
        if not location.search_query:
            raise ValidationError("yelp requires search_query")
        businesses = await self._businesses.search(location.search_query)
        return [normalize_business(business) for business in businesses]
