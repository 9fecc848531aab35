"""Third-party API clients and the normalization of their payloads."""

from .geocoding import GoogleGeocoder
from .movies import TmdbClient
from .weather import ForecastClient
from .yelp import YelpClient

__all__ = [
    "GoogleGeocoder",
    "ForecastClient",
    "TmdbClient",
    "YelpClient",
]
