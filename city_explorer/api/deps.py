"""API dependency helpers and resolver providers."""

from __future__ import annotations

import json

import httpx
import pydantic
from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from city_explorer import db
from city_explorer.core import config
from city_explorer.core.config import Settings
from city_explorer.dto import LocationQueryDTO
from city_explorer.infra.unit_of_work import SqlAlchemyUnitOfWork
from city_explorer.providers import ForecastClient, GoogleGeocoder, TmdbClient, YelpClient
from city_explorer.services.cache import SingleFlight
from city_explorer.services.locations import Geocoder, LocationResolver
from city_explorer.services.movies import MovieResolver, TopRatedSource
from city_explorer.services.weather import DailyForecastSource, WeatherResolver
from city_explorer.services.yelp import BusinessSearch, YelpResolver

__all__ = [
    "get_settings",
    "get_session_factory",
    "get_http_client",
    "get_location_from_query",
    "get_geocoder",
    "get_forecast_source",
    "get_movie_source",
    "get_business_search",
    "get_location_resolver",
    "get_weather_resolver",
    "get_movie_resolver",
    "get_yelp_resolver",
]


def get_settings() -> Settings:
    return config.settings


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return db.SessionLocal


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def _single_flight(request: Request, entity: str) -> SingleFlight | None:
    flights: dict[str, SingleFlight] | None = getattr(request.app.state, "single_flights", None)
    if flights is None:
        return None
    return flights.setdefault(entity, SingleFlight())


def get_location_from_query(
    request: Request,
    data: str | None = Query(None, description="Serialized location (JSON or data[...] keys)"),
) -> LocationQueryDTO:
    """
    Accept the location either as JSON in ``data`` or as the bracketed keys
    (``data[id]=1&data[latitude]=...``) that form-encoding clients send.
    """
    raw: object = None
    if data:
        try:
            raw = json.loads(data)
        except ValueError:
            raw = None
    if raw is None:
        raw = {
            key[len("data[") : -1]: value
            for key, value in request.query_params.items()
            if key.startswith("data[") and key.endswith("]")
        }

    if not isinstance(raw, dict) or not raw:
        raise HTTPException(status_code=422, detail="data must be a serialized location")
    try:
        return LocationQueryDTO.model_validate(raw)
    except pydantic.ValidationError:
        raise HTTPException(status_code=422, detail="data must be a serialized location")


# --- Provider clients ---


def get_geocoder(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> Geocoder:
    return GoogleGeocoder(http, settings.geocode_api_key)


def get_forecast_source(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> DailyForecastSource:
    return ForecastClient(http, settings.weather_api_key, base_url=settings.weather_api_url)


def get_movie_source(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> TopRatedSource:
    return TmdbClient(http, settings.movie_api_key)


def get_business_search(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> BusinessSearch:
    return YelpClient(http, settings.yelp_api_key, limit=settings.yelp_search_limit)


# --- Resolvers ---


def _uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SqlAlchemyUnitOfWork(session_factory)


def get_location_resolver(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    geocoder: Geocoder = Depends(get_geocoder),
) -> LocationResolver:
    return LocationResolver(
        _uow_factory(session_factory),
        geocoder,
        single_flight=_single_flight(request, LocationResolver.entity),
    )


def get_weather_resolver(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    forecasts: DailyForecastSource = Depends(get_forecast_source),
) -> WeatherResolver:
    return WeatherResolver(
        _uow_factory(session_factory),
        forecasts,
        single_flight=_single_flight(request, WeatherResolver.entity),
    )


def get_movie_resolver(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    movies: TopRatedSource = Depends(get_movie_source),
) -> MovieResolver:
    return MovieResolver(
        _uow_factory(session_factory),
        movies,
        single_flight=_single_flight(request, MovieResolver.entity),
    )


def get_yelp_resolver(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    businesses: BusinessSearch = Depends(get_business_search),
) -> YelpResolver:
    return YelpResolver(
        _uow_factory(session_factory),
        businesses,
        single_flight=_single_flight(request, YelpResolver.entity),
    )
