"""Shortest route request/response schemas."""

from typing import List
from pydantic import BaseModel, Field


class ShortestRouteRequest(BaseModel):
    """Origin and destination station display names."""
    from_: str = Field(..., alias="from", min_length=1, description="Origin station name")
    to: str = Field(..., min_length=1, description="Destination station name")

    class Config:
        populate_by_name = True


class ShortestRouteResponse(BaseModel):
    from_: str = Field(..., alias="from")
    to: str
    path: List[str]  # Station display names, origin first
    station_ids: List[str]
    distance: float

    class Config:
        populate_by_name = True
