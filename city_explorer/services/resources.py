"""Shared lookup -> fetch -> persist flow for tables keyed by location."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError

from city_explorer.core.exceptions import StoreError
from city_explorer.infra.unit_of_work import UnitOfWork
from city_explorer.repositories.interfaces import LocationRecord, LocationScopedRepository
from city_explorer.services.cache import CacheResult, Hit, SingleFlight, cache_result

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT")

UnitOfWorkFactory = Callable[[], UnitOfWork]


class LocationScopedResolver(Generic[RecordT]):
    """Base resolver for weather, movie and yelp rows.

    Subclasses name the entity, pick their repository off the unit of work,
    and implement ``_fetch`` (provider call + normalization).
    """

    entity: str

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        single_flight: SingleFlight | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._single_flight = single_flight

    def _repository(self, uow: UnitOfWork) -> LocationScopedRepository[RecordT]:
        raise NotImplementedError

    async def _fetch(self, location: LocationRecord) -> Sequence[RecordT]:
        raise NotImplementedError

    async def lookup(self, location_id: int) -> CacheResult[RecordT]:
        try:
            async with self._uow_factory() as uow:
                rows = await self._repository(uow).list_by_location(location_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"{self.entity} lookup failed") from exc
        return cache_result(rows)

    async def fetch_and_store(self, location: LocationRecord) -> list[RecordT]:
        records = list(await self._fetch(location))
        for record in records:
            record.location_id = location.id

        try:
            async with self._uow_factory() as uow:
                await self._repository(uow).add_many(location.id, records)
        except SQLAlchemyError as exc:
            raise StoreError(f"{self.entity} insert failed") from exc

        logger.info(
            "resources_stored", entity=self.entity, location_id=location.id, count=len(records)
        )
        return records

    async def resolve(self, location: LocationRecord) -> list[RecordT]:
        if self._single_flight is None:
            return await self._resolve(location)
        return await self._single_flight.do(
            (self.entity, location.id), lambda: self._resolve(location)
        )

    async def _resolve(self, location: LocationRecord) -> list[RecordT]:
        cached = await self.lookup(location.id)
        if isinstance(cached, Hit):
            logger.info("cache_hit", entity=self.entity, key=location.id, count=len(cached.rows))
            return cached.rows
        logger.info("cache_miss", entity=self.entity, key=location.id)
        return await self.fetch_and_store(location)
