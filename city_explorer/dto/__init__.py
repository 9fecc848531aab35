"""Public DTO exports for FastAPI response models."""

from .location import LocationDTO, LocationQueryDTO
from .resources import MovieDTO, WeatherDTO, YelpDTO

__all__ = [
    "LocationDTO",
    "LocationQueryDTO",
    "WeatherDTO",
    "MovieDTO",
    "YelpDTO",
]
