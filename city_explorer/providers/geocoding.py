"""Google Geocoding API client."""

from __future__ import annotations

import httpx
import structlog
from pydantic import BaseModel

from city_explorer.core.exceptions import UpstreamError
from city_explorer.providers.http import parse_payload, request_json
from city_explorer.repositories.interfaces import LocationRecord

logger = structlog.get_logger(__name__)

PROVIDER = "google_geocode"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

# Statuses that mean "the request worked"; anything else is a provider failure.
_OK_STATUSES = {"OK", "ZERO_RESULTS"}


class LatLng(BaseModel):
    lat: float
    lng: float


class Geometry(BaseModel):
    location: LatLng


class GeocodeResult(BaseModel):
    formatted_address: str
    geometry: Geometry


class GeocodeResponse(BaseModel):
    results: list[GeocodeResult]
    status: str = "OK"


def normalize_location(search_query: str, result: GeocodeResult) -> LocationRecord:
    return LocationRecord(
        search_query=search_query,
        formatted_query=result.formatted_address,
        latitude=result.geometry.location.lat,
        longitude=result.geometry.location.lng,
    )


class GoogleGeocoder:
    def __init__(self, client: httpx.AsyncClient, api_key: str, *, url: str = GEOCODE_URL) -> None:
        self._client = client
        self._api_key = api_key
        self._url = url

    async def geocode(self, query: str) -> list[GeocodeResult]:
        """Return geocoder matches for the raw query, best match first."""

        payload = await request_json(
            self._client,
            self._url,
            provider=PROVIDER,
            params={"address": query, "key": self._api_key},
        )
        response = parse_payload(PROVIDER, GeocodeResponse, payload)
        if response.status not in _OK_STATUSES:
            logger.warning("google_geocode_status", status=response.status)
            raise UpstreamError(PROVIDER, f"status {response.status}")
        return response.results
