"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lng: float

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"


@dataclass(slots=True)
class Stop:
    """A pickup/drop-off point; usable for routing once both coordinates are set."""

    name: str
    address: str = ""
    id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    estimated_students: int = 0

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def point(self) -> GeoPoint:
        if not self.has_coordinates:
            raise ValueError(f"Stop '{self.name}' has no coordinates.")
        return GeoPoint(lat=self.latitude, lng=self.longitude)


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    lat: float
    lng: float
    formatted_address: str


@dataclass(frozen=True, slots=True)
class RouteLeg:
    distance: int
    duration: int
    distance_text: str
    duration_text: str


@dataclass(slots=True)
class DistanceResult:
    distance: int
    duration: int
    distance_text: str
    duration_text: str
    optimized_waypoint_order: Optional[List[int]] = None
    legs: List[RouteLeg] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LegSummary:
    from_stop: str
    to_stop: Optional[str]
    distance: str
    duration: str


@dataclass(slots=True)
class OptimizedRoute:
    optimized_stops: List[Stop]
    total_distance: int
    total_duration: int
    distance_text: str
    duration_text: str
    legs: List[LegSummary] = field(default_factory=list)

    @property
    def routed(self) -> bool:
        """True when at least two stops were placed on a provider route."""
        return len(self.optimized_stops) >= 2
