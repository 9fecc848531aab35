"""Unit of Work abstraction used by the resolvers."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from city_explorer.repositories.interfaces import (
    LocationRepository,
    LocationScopedRepository,
    MovieRecord,
    WeatherRecord,
    YelpRecord,
)
from city_explorer.repositories.sqlalchemy import (
    SqlAlchemyLocationRepository,
    SqlAlchemyMovieRepository,
    SqlAlchemyWeatherRepository,
    SqlAlchemyYelpRepository,
)


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """Defines the repository boundary exposed to resolvers."""

    locations: LocationRepository
    weathers: LocationScopedRepository[WeatherRecord]
    movies: LocationScopedRepository[MovieRecord]
    yelps: LocationScopedRepository[YelpRecord]


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of Work backed by SQLAlchemy async sessions.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self.locations: LocationRepository
        self.weathers: LocationScopedRepository[WeatherRecord]
        self.movies: LocationScopedRepository[MovieRecord]
        self.yelps: LocationScopedRepository[YelpRecord]

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        session = self._session_factory()
        self._session = session
        self.locations = SqlAlchemyLocationRepository(session)
        self.weathers = SqlAlchemyWeatherRepository(session)
        self.movies = SqlAlchemyMovieRepository(session)
        self.yelps = SqlAlchemyYelpRepository(session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is None:
            return
        try:
            if exc_type:
                await self._session.rollback()
            else:
                await self._session.commit()
        finally:
            await self._session.close()
            self._session = None
