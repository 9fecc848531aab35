"""Repository abstractions and the record types they exchange with services."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar


@dataclass
class LocationRecord:
    """A stored location, or the part of one a client echoes back.

    Echoed locations always carry ``id``; routes check for the other fields
    they need and resolvers refuse to call a provider without them.
    """

    search_query: str | None = None
    formatted_query: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    id: int | None = None


@dataclass
class WeatherRecord:
    forecast: str
    time: str
    location_id: int | None = None


@dataclass
class MovieRecord:
    title: str
    overview: str | None
    average_votes: float | None
    total_votes: int | None
    image_url: str | None
    popularity: float | None
    released_on: str | None
    created_at: int
    location_id: int | None = None


@dataclass
class YelpRecord:
    name: str
    image_url: str | None
    price: str | None
    rating: float | None
    url: str | None
    location_id: int | None = None


RecordT = TypeVar("RecordT")


class LocationRepository(Protocol):
    """Repository boundary for the locations table."""

    async def get_by_search_query(self, search_query: str) -> LocationRecord | None: ...

    async def add(self, record: LocationRecord) -> LocationRecord: ...


class LocationScopedRepository(Protocol[RecordT]):
    """Repository boundary for tables keyed by location_id (weathers, movies, yelps)."""

    async def list_by_location(self, location_id: int) -> list[RecordT]: ...

    async def add_many(self, location_id: int, records: Sequence[RecordT]) -> None: ...
