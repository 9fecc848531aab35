"""SQLAlchemy implementations of repository interfaces."""

from .location import SqlAlchemyLocationRepository
from .resources import (
    SqlAlchemyMovieRepository,
    SqlAlchemyWeatherRepository,
    SqlAlchemyYelpRepository,
)

__all__ = [
    "SqlAlchemyLocationRepository",
    "SqlAlchemyWeatherRepository",
    "SqlAlchemyMovieRepository",
    "SqlAlchemyYelpRepository",
]
