from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from ..restaurants.models import RestaurantRecord


class RadarState(str, Enum):
    idle = "idle"
    locating = "locating"
    scanning = "scanning"
    results = "results"
    picking = "picking"
    winner = "winner"
    error = "error"


class LocationErrorReport(BaseModel):
    reason: Literal["unavailable", "denied", "timeout"]


class RadarStatus(BaseModel):
    state: RadarState
    restaurants: list[RestaurantRecord] = Field(default_factory=list)
    highlighted: RestaurantRecord | None = None
    winner: RestaurantRecord | None = None
    error: str | None = None
    demo_mode: bool = False
