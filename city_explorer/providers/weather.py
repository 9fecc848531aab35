"""Daily forecast client for Dark Sky compatible APIs (e.g. Pirate Weather)."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
from pydantic import BaseModel

from city_explorer.providers.http import parse_payload, request_json
from city_explorer.repositories.interfaces import WeatherRecord

PROVIDER = "forecast"

# Matches the "Mon Oct 19 2026" style day labels clients already render.
TIME_FORMAT = "%a %b %d %Y"


class DailyDataPoint(BaseModel):
    time: int  # epoch seconds
    summary: str


class DailyBlock(BaseModel):
    data: list[DailyDataPoint]


class ForecastResponse(BaseModel):
    daily: DailyBlock


def format_day(epoch_seconds: int) -> str:
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime(TIME_FORMAT)


def normalize_forecast(day: DailyDataPoint) -> WeatherRecord:
    return WeatherRecord(forecast=day.summary, time=format_day(day.time))


class ForecastClient:
    def __init__(self, client: httpx.AsyncClient, api_key: str, *, base_url: str) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def daily(self, latitude: float, longitude: float) -> list[DailyDataPoint]:
        url = f"{self._base_url}/{self._api_key}/{latitude},{longitude}"
        payload = await request_json(self._client, url, provider=PROVIDER)
        return parse_payload(PROVIDER, ForecastResponse, payload).daily.data
