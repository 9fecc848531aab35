"""DTOs for locations exposed via the public API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from city_explorer.repositories.interfaces import LocationRecord


class LocationDTO(BaseModel):
    id: int | None = Field(default=None, description="Location ID (used by the other routes)")
    search_query: str = Field(description="Raw search string as entered")
    formatted_query: str = Field(description="Canonical name returned by the geocoder")
    latitude: float
    longitude: float

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "search_query": "Seattle",
                "formatted_query": "Seattle, WA, USA",
                "latitude": 47.6062095,
                "longitude": -122.3320708,
            }
        },
    )


class LocationQueryDTO(BaseModel):
    """A location as echoed back by clients in the ``data`` query parameter."""

    id: int
    search_query: str | None = None
    formatted_query: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def to_record(self) -> LocationRecord:
        return LocationRecord(
            id=self.id,
            search_query=self.search_query,
            formatted_query=self.formatted_query,
            latitude=self.latitude,
            longitude=self.longitude,
        )
