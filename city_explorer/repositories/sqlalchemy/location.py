"""SQLAlchemy implementation of the location repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.models import Location
from city_explorer.repositories.interfaces import LocationRecord, LocationRepository


def _to_record(row: Location) -> LocationRecord:
    return LocationRecord(
        id=row.id,
        search_query=row.search_query,
        formatted_query=row.formatted_query,
        latitude=row.latitude,
        longitude=row.longitude,
    )


class SqlAlchemyLocationRepository(LocationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_search_query(self, search_query: str) -> LocationRecord | None:
        stmt = (
            select(Location)
            .where(Location.search_query == search_query)
            .order_by(Location.id.asc())
            .limit(1)
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _to_record(row)

    async def add(self, record: LocationRecord) -> LocationRecord:
        row = Location(
            search_query=record.search_query,
            formatted_query=record.formatted_query,
            latitude=record.latitude,
            longitude=record.longitude,
        )
        self._session.add(row)
        await self._session.flush()
        record.id = row.id
        return record
