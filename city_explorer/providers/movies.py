"""TMDB (The Movie Database) v3 client."""

from __future__ import annotations

import time

import httpx
from pydantic import BaseModel

from city_explorer.providers.http import parse_payload, request_json
from city_explorer.repositories.interfaces import MovieRecord

PROVIDER = "tmdb"
TOP_RATED_URL = "https://api.themoviedb.org/3/movie/top_rated"


class MovieResult(BaseModel):
    title: str
    overview: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    poster_path: str | None = None
    popularity: float | None = None
    release_date: str | None = None


class TopRatedResponse(BaseModel):
    results: list[MovieResult]


def _now_millis() -> int:
    return int(time.time() * 1000)


def normalize_movie(result: MovieResult, *, created_at: int | None = None) -> MovieRecord:
    return MovieRecord(
        title=result.title,
        overview=result.overview,
        average_votes=result.vote_average,
        total_votes=result.vote_count,
        image_url=result.poster_path,
        popularity=result.popularity,
        released_on=result.release_date,
        created_at=created_at if created_at is not None else _now_millis(),
    )


class TmdbClient:
    def __init__(
        self, client: httpx.AsyncClient, api_key: str, *, url: str = TOP_RATED_URL
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._url = url

    async def top_rated(self, region: str) -> list[MovieResult]:
        """First page of top rated movies, filtered by ``region``."""

        payload = await request_json(
            self._client,
            self._url,
            provider=PROVIDER,
            params={
                "api_key": self._api_key,
                "language": "en-US",
                "page": 1,
                "region": region,
            },
        )
        return parse_payload(PROVIDER, TopRatedResponse, payload).results
