from __future__ import annotations

from typing import Protocol

from city_explorer.core.exceptions import ValidationError
from city_explorer.infra.unit_of_work import UnitOfWork
from city_explorer.providers.movies import MovieResult, normalize_movie
from city_explorer.repositories.interfaces import (
    LocationRecord,
    LocationScopedRepository,
    MovieRecord,
)
from city_explorer.services.resources import LocationScopedResolver


class TopRatedSource(Protocol):
    async def top_rated(self, region: str) -> list[MovieResult]: ...


class MovieResolver(LocationScopedResolver[MovieRecord]):
    """Top rated movies for the location's formatted name."""

    entity = "movie"

    def __init__(self, uow_factory, movies: TopRatedSource, **kwargs) -> None:
        super().__init__(uow_factory, **kwargs)
        self._movies = movies

    def _repository(self, uow: UnitOfWork) -> LocationScopedRepository[MovieRecord]:
        return uow.movies

    async def _fetch(self, location: LocationRecord) -> list[MovieRecord]:
        if not location.formatted_query:
            raise ValidationError("movies require formatted_query")
        results = await self._movies.top_rated(location.formatted_query)
        return [normalize_movie(result) for result in results]
