"""SQLAlchemy repositories for the location-scoped tables."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, fields
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.models import Movie, Weather, Yelp
from city_explorer.models.base import Base
from city_explorer.repositories.interfaces import (
    LocationScopedRepository,
    MovieRecord,
    WeatherRecord,
    YelpRecord,
)

ModelT = TypeVar("ModelT", bound=Base)
RecordT = TypeVar("RecordT")


class _SqlAlchemyLocationScopedRepository(
    LocationScopedRepository[RecordT], Generic[ModelT, RecordT]
):
    model: type[ModelT]
    record: type[RecordT]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_record(self, row: ModelT) -> RecordT:
        return self.record(**{f.name: getattr(row, f.name) for f in fields(self.record)})

    async def list_by_location(self, location_id: int) -> list[RecordT]:
        stmt = (
            select(self.model)
            .where(self.model.location_id == location_id)
            .order_by(self.model.id.asc())
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [self._to_record(row) for row in rows]

    async def add_many(self, location_id: int, records: Sequence[RecordT]) -> None:
        if not records:
            return
        for record in records:
            values = asdict(record)
            values["location_id"] = location_id
            self._session.add(self.model(**values))
        await self._session.flush()


class SqlAlchemyWeatherRepository(_SqlAlchemyLocationScopedRepository[Weather, WeatherRecord]):
    model = Weather
    record = WeatherRecord


class SqlAlchemyMovieRepository(_SqlAlchemyLocationScopedRepository[Movie, MovieRecord]):
    model = Movie
    record = MovieRecord


class SqlAlchemyYelpRepository(_SqlAlchemyLocationScopedRepository[Yelp, YelpRecord]):
    model = Yelp
    record = YelpRecord
