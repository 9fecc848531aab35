"""Geocoded location model."""

from __future__ import annotations

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from city_explorer.models.base import Base


class Location(Base):
    """A search string resolved to coordinates.

    search_query is unique by lookup-before-insert only; there is no DB constraint.
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    search_query: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    formatted_query: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
