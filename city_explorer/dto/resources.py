"""DTOs for weather, movie and business lists."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WeatherDTO(BaseModel):
    forecast: str = Field(description="Daily summary text")
    time: str = Field(description='Day label, e.g. "Mon Oct 19 2026"')

    model_config = ConfigDict(from_attributes=True)


class MovieDTO(BaseModel):
    title: str
    overview: str | None = None
    average_votes: float | None = None
    total_votes: int | None = None
    image_url: str | None = Field(default=None, description="TMDB poster path")
    popularity: float | None = None
    released_on: str | None = None
    created_at: int = Field(description="Epoch milliseconds when the movie was fetched")

    model_config = ConfigDict(from_attributes=True)


class YelpDTO(BaseModel):
    name: str
    image_url: str | None = None
    price: str | None = None
    rating: float | None = None
    url: str | None = None

    model_config = ConfigDict(from_attributes=True)
