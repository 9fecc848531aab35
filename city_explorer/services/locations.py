"""Location resolver: search string -> stored, geocoded location."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import structlog
from sqlalchemy.exc import SQLAlchemyError

from city_explorer.core.exceptions import NotFoundError, StoreError
from city_explorer.infra.unit_of_work import UnitOfWork
from city_explorer.providers.geocoding import GeocodeResult, normalize_location
from city_explorer.repositories.interfaces import LocationRecord
from city_explorer.services.cache import CacheResult, Hit, SingleFlight, cache_result

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


class Geocoder(Protocol):
    async def geocode(self, query: str) -> list[GeocodeResult]: ...


class LocationResolver:
    """Resolve a raw search query to a Location, geocoding and storing it on first use."""

    entity = "location"

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        geocoder: Geocoder,
        *,
        single_flight: SingleFlight | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._geocoder = geocoder
        self._single_flight = single_flight

    async def lookup(self, search_query: str) -> CacheResult[LocationRecord]:
        try:
            async with self._uow_factory() as uow:
                row = await uow.locations.get_by_search_query(search_query)
        except SQLAlchemyError as exc:
            raise StoreError("location lookup failed") from exc
        return cache_result([row] if row is not None else [])

    async def fetch_and_store(self, search_query: str) -> LocationRecord:
        results = await self._geocoder.geocode(search_query)
        if not results:
            logger.info("geocode_no_results", search_query=search_query)
            raise NotFoundError(f"no geocoding results for {search_query!r}")

        location = normalize_location(search_query, results[0])
        try:
            async with self._uow_factory() as uow:
                await uow.locations.add(location)
        except SQLAlchemyError as exc:
            raise StoreError("location insert failed") from exc

        logger.info("location_stored", location_id=location.id, search_query=search_query)
        return location

    async def resolve(self, search_query: str) -> LocationRecord:
        if self._single_flight is None:
            return await self._resolve(search_query)
        return await self._single_flight.do(
            (self.entity, search_query), lambda: self._resolve(search_query)
        )

    async def _resolve(self, search_query: str) -> LocationRecord:
        cached = await self.lookup(search_query)
        if isinstance(cached, Hit):
            logger.info("cache_hit", entity=self.entity, key=search_query)
            return cached.rows[0]
        logger.info("cache_miss", entity=self.entity, key=search_query)
        return await self.fetch_and_store(search_query)
