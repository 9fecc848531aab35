# Import every model so Base.metadata knows all tables before create_all().
# city_explorer/models/__init__.py
from .base import Base
from .location import Location
from .movie import Movie
from .weather import Weather
from .yelp import Yelp

__all__ = [
    "Base",
    "Location",
    "Weather",
    "Movie",
    "Yelp",
]
