"""Yelp Fusion business search client."""

from __future__ import annotations

import httpx
from pydantic import BaseModel

from city_explorer.providers.http import parse_payload, request_json
from city_explorer.repositories.interfaces import YelpRecord

PROVIDER = "yelp"
SEARCH_URL = "https://api.yelp.com/v3/businesses/search"


class Business(BaseModel):
    name: str
    image_url: str | None = None
    price: str | None = None
    rating: float | None = None
    url: str | None = None


class BusinessSearchResponse(BaseModel):
    businesses: list[Business]


def normalize_business(business: Business) -> YelpRecord:
    return YelpRecord(
        name=business.name,
        image_url=business.image_url,
        price=business.price,
        rating=business.rating,
        url=business.url,
    )


class YelpClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        *,
        limit: int = 20,
        url: str = SEARCH_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._limit = limit
        self._url = url

    async def search(self, location: str) -> list[Business]:
        payload = await request_json(
            self._client,
            self._url,
            provider=PROVIDER,
            params={"location": location, "limit": self._limit},
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        return parse_payload(PROVIDER, BusinessSearchResponse, payload).businesses
