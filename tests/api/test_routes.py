from __future__ import annotations

import json

import pytest
from sqlalchemy import func, select

from city_explorer.api import errors
from city_explorer.api.errors import GENERIC_ERROR_DETAIL
from city_explorer.core.exceptions import MalformedPayloadError, UpstreamError
from city_explorer.models import Location, Weather, Yelp
from city_explorer.services import resources


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def __getattr__(self, level: str):
        def _log(event: str, **kw) -> None:
            self.events.append((level, event, kw))

        return _log


def _data(location) -> str:
    return json.dumps(
        {
            "id": location.id,
            "search_query": location.search_query,
            "formatted_query": location.formatted_query,
            "latitude": location.latitude,
            "longitude": location.longitude,
        }
    )


@pytest.mark.asyncio
async def test_location_miss_then_hit(app_client, session_factory, geocoder):
    first = await app_client.get("/location", params={"data": "Seattle"})
    assert first.status_code == 200
    body = first.json()
    assert body["search_query"] == "Seattle"
    assert body["formatted_query"] == "Seattle, WA"
    assert body["latitude"] == pytest.approx(47.6)
    assert body["longitude"] == pytest.approx(-122.3)
    assert isinstance(body["id"], int)

    second = await app_client.get("/location", params={"data": "Seattle"})
    assert second.status_code == 200
    assert second.json() == body
    assert geocoder.calls == ["Seattle"]
    assert await _count(session_factory, Location) == 1


@pytest.mark.asyncio
async def test_location_not_found_is_generic_500(app_client, session_factory, geocoder):
    geocoder.payloads = []

    res = await app_client.get("/location", params={"data": "Atlantis"})

    assert res.status_code == 500
    assert res.json() == {"detail": GENERIC_ERROR_DETAIL}
    assert await _count(session_factory, Location) == 0


@pytest.mark.asyncio
async def test_location_accepts_long_query(app_client, session_factory):
    query = "Seattle, Washington " + "z" * 280

    res = await app_client.get("/location", params={"data": query})

    assert res.status_code == 200
    assert res.json()["search_query"] == query
    async with session_factory() as session:
        stored = (await session.execute(select(Location.search_query))).scalar_one()
    assert len(stored) == 300


@pytest.mark.asyncio
async def test_location_requires_query(app_client):
    res = await app_client.get("/location")
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_weather_with_json_data(app_client, session_factory, seattle):
    res = await app_client.get("/weather", params={"data": _data(seattle)})

    assert res.status_code == 200
    assert res.json() == [
        {"forecast": "Light rain in the morning.", "time": "Mon Oct 22 2018"},
        {"forecast": "Mostly cloudy throughout the day.", "time": "Tue Oct 23 2018"},
        {"forecast": "Clear throughout the day.", "time": "Wed Oct 24 2018"},
    ]
    assert await _count(session_factory, Weather) == 3


@pytest.mark.asyncio
async def test_weather_with_bracketed_data_hits_cache(app_client, seattle, forecasts):
    params = {
        "data[id]": str(seattle.id),
        "data[search_query]": seattle.search_query,
        "data[formatted_query]": seattle.formatted_query,
        "data[latitude]": str(seattle.latitude),
        "data[longitude]": str(seattle.longitude),
    }
    fetched = await app_client.get("/weather", params=params)
    cached = await app_client.get("/weather", params=params)

    assert fetched.status_code == cached.status_code == 200
    assert cached.json() == fetched.json()
    assert len(forecasts.calls) == 1


@pytest.mark.asyncio
async def test_weather_without_coordinates_is_422(app_client, seattle):
    res = await app_client.get("/weather", params={"data": json.dumps({"id": seattle.id})})
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_weather_with_garbage_data_is_422(app_client):
    res = await app_client.get("/weather", params={"data": "not-a-location"})
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_weather_for_unknown_location_is_generic_500(app_client, session_factory):
    data = json.dumps({"id": 4242, "latitude": 1.0, "longitude": 2.0})

    res = await app_client.get("/weather", params={"data": data})

    assert res.status_code == 500
    assert res.json() == {"detail": GENERIC_ERROR_DETAIL}
    assert await _count(session_factory, Weather) == 0



@pytest.mark.asyncio
async def test_store_failure_is_logged_once(monkeypatch, app_client):
    handler_log, resolver_log = _RecordingLogger(), _RecordingLogger()
    monkeypatch.setattr(errors, "logger", handler_log)
    monkeypatch.setattr(resources, "logger", resolver_log)
    data = json.dumps({"id": 4242, "latitude": 1.0, "longitude": 2.0})

    res = await app_client.get("/weather", params={"data": data})

    assert res.status_code == 500
    assert [(level, event) for level, event, _ in handler_log.events] == [
        ("error", "request_failed")
    ]
    assert handler_log.events[0][2]["error_kind"] == "StoreError"
    assert all(level != "error" for level, _, _ in resolver_log.events)


@pytest.mark.asyncio
async def test_movies_miss_and_hit_have_same_shape(app_client, seattle, top_rated):
    fetched = await app_client.get("/movies", params={"data": _data(seattle)})
    cached = await app_client.get("/movies", params={"data": _data(seattle)})

    assert fetched.status_code == 200
    movies = fetched.json()
    assert [m["title"] for m in movies] == ["Sleepless in Seattle", "Singles"]
    assert set(movies[0]) == {
        "title",
        "overview",
        "average_votes",
        "total_votes",
        "image_url",
        "popularity",
        "released_on",
        "created_at",
    }
    assert cached.json() == movies
    assert top_rated.calls == ["Seattle, WA"]


@pytest.mark.asyncio
async def test_movies_upstream_failure_is_generic_500(app_client, seattle, top_rated):
    top_rated.error = UpstreamError("tmdb", "request failed with status 401", status_code=401)

    res = await app_client.get("/movies", params={"data": _data(seattle)})

    assert res.status_code == 500
    assert res.json() == {"detail": GENERIC_ERROR_DETAIL}


@pytest.mark.asyncio
async def test_yelp_by_location_id_and_search_query(
    app_client, session_factory, seattle, business_search
):
    res = await app_client.get(
        "/yelp", params={"location_id": seattle.id, "search_query": "Seattle"}
    )

    assert res.status_code == 200
    assert res.json() == [
        {
            "name": "Pike Place Chowder",
            "image_url": "https://s3-media.example/chowder.jpg",
            "price": "$$",
            "rating": 4.5,
            "url": "https://www.yelp.com/biz/pike-place-chowder-seattle",
        },
        {
            "name": "Piroshky Piroshky",
            "image_url": "https://s3-media.example/piroshky.jpg",
            "price": None,
            "rating": 4.5,
            "url": "https://www.yelp.com/biz/piroshky-piroshky-seattle",
        },
    ]
    assert business_search.calls == ["Seattle"]
    assert await _count(session_factory, Yelp) == 2


@pytest.mark.asyncio
async def test_yelp_malformed_payload_is_generic_500(
    app_client, session_factory, seattle, business_search
):
    business_search.error = MalformedPayloadError("yelp", "unexpected payload shape (1 errors)")

    res = await app_client.get(
        "/yelp", params={"location_id": seattle.id, "search_query": "Seattle"}
    )

    assert res.status_code == 500
    assert await _count(session_factory, Yelp) == 0


@pytest.mark.asyncio
async def test_full_flow_location_then_resources(app_client):
    location = (await app_client.get("/location", params={"data": "Seattle"})).json()
    data = json.dumps(location)

    weather = await app_client.get("/weather", params={"data": data})
    movies = await app_client.get("/movies", params={"data": data})
    yelp = await app_client.get(
        "/yelp",
        params={"location_id": location["id"], "search_query": location["search_query"]},
    )

    assert [r.status_code for r in (weather, movies, yelp)] == [200, 200, 200]
    assert len(weather.json()) == 3
    assert len(movies.json()) == 2
    assert len(yelp.json()) == 2
