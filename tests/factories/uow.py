"""Stub unit of work over plain lists, for tests that do not need SQL."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import replace

from city_explorer.repositories.interfaces import LocationRecord


class InMemoryLocationRepository:
    def __init__(self) -> None:
        self.rows: list[LocationRecord] = []

    async def get_by_search_query(self, search_query: str) -> LocationRecord | None:
        await asyncio.sleep(0)
        for row in self.rows:
            if row.search_query == search_query:
                return replace(row)
        return None

    async def add(self, record: LocationRecord) -> LocationRecord:
        await asyncio.sleep(0)
        record.id = len(self.rows) + 1
        self.rows.append(replace(record))
        return record


class InMemoryScopedRepository:
    def __init__(self) -> None:
        self.rows: list = []

    async def list_by_location(self, location_id: int) -> list:
        await asyncio.sleep(0)
        return [replace(row) for row in self.rows if row.location_id == location_id]

    async def add_many(self, location_id: int, records: Sequence) -> None:
        await asyncio.sleep(0)
        for record in records:
            self.rows.append(replace(record, location_id=location_id))


class InMemoryStore:
    def __init__(self) -> None:
        self.locations = InMemoryLocationRepository()
        self.weathers = InMemoryScopedRepository()
        self.movies = InMemoryScopedRepository()
        self.yelps = InMemoryScopedRepository()


class StubUnitOfWork:
    def __init__(self, store: InMemoryStore) -> None:
        self.locations = store.locations
        self.weathers = store.weathers
        self.movies = store.movies
        self.yelps = store.yelps

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False
