from __future__ import annotations

from typing import Protocol

from city_explorer.core.exceptions import ValidationError
from city_explorer.infra.unit_of_work import UnitOfWork
from city_explorer.providers.weather import DailyDataPoint, normalize_forecast
from city_explorer.repositories.interfaces import (
    LocationRecord,
    LocationScopedRepository,
    WeatherRecord,
)
from city_explorer.services.resources import LocationScopedResolver


class DailyForecastSource(Protocol):
    async def daily(self, latitude: float, longitude: float) -> list[DailyDataPoint]: ...


class WeatherResolver(LocationScopedResolver[WeatherRecord]):
    """Daily forecasts by the location's coordinates."""

    entity = "weather"

    def __init__(self, uow_factory, forecasts: DailyForecastSource, **kwargs) -> None:
        super().__init__(uow_factory, **kwargs)
        self._forecasts = forecasts

    def _repository(self, uow: UnitOfWork) -> LocationScopedRepository[WeatherRecord]:
        return uow.weathers

    async def _fetch(self, location: LocationRecord) -> list[WeatherRecord]:
        if location.latitude is None or location.longitude is None:
            raise ValidationError("weather requires latitude and longitude")
        days = await self._forecasts.daily(location.latitude, location.longitude)
        return [normalize_forecast(day) for day in days]
