from __future__ import annotations

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CUISINE = "Local Flavor"
DEFAULT_DESCRIPTION = "Highly rated restaurant nearby."


def new_record_id() -> str:
    return uuid4().hex[:12]


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class RestaurantRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_record_id)
    name: str = Field(..., min_length=2)
    cuisine: str = DEFAULT_CUISINE
    description: str = DEFAULT_DESCRIPTION
    map_uri: str | None = None


class CitationRecord(BaseModel):
    """A grounding chunk flattened to the fields used for map-link matching."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    uri: str | None = None
    source: Literal["web", "maps"] = "web"


class NearbyResponse(BaseModel):
    restaurants: list[RestaurantRecord]
    demo_mode: bool = False
