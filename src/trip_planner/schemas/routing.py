"""Geocoding, distance and optimization request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class PointModel(CamelModel):
    lat: float
    lng: float


class StopModel(CamelModel):
    id: Optional[str] = None
    name: str
    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    estimated_students: int = Field(default=0, ge=0)


class GeocodeRequest(CamelModel):
    address: str = ""


class GeocodeResponse(CamelModel):
    lat: float
    lng: float
    formatted_address: str


class DistanceRequest(CamelModel):
    origin: PointModel
    destination: PointModel
    waypoints: Optional[List[PointModel]] = None


class DistanceResponse(CamelModel):
    distance: int = Field(..., description="Total distance in meters.")
    duration: int = Field(..., description="Total duration in seconds.")
    distance_text: str
    duration_text: str
    optimized_waypoint_order: Optional[List[int]] = None


class OptimizeRequest(CamelModel):
    stops: List[StopModel]


class LegModel(CamelModel):
    from_stop: str = Field(..., alias="from")
    to_stop: Optional[str] = Field(default=None, alias="to")
    distance: str
    duration: str


class OptimizeResponse(CamelModel):
    optimized_stops: List[StopModel]
    total_distance: int
    total_duration: int
    distance_text: str
    duration_text: str
    legs: List[LegModel] = Field(default_factory=list)
