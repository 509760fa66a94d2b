"""Trip generation and trip administration schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import CamelModel

RoutingStatus = Literal["ok", "failed", "skipped"]
ResourceType = Literal["driver", "vehicle", "attender"]


class GenerateTripsRequest(CamelModel):
    profile_id: str
    school_id: str
    vehicle_capacity: Optional[int] = Field(default=None, ge=1, description="Seats per vehicle; defaults to 40.")
    persist: bool = Field(default=False, description="Export the run as JSON/CSV under the data root.")


class TripSuggestionModel(CamelModel):
    trip_number: int
    trip_name: str
    student_count: int
    stops: int
    students: List[str]
    estimated_distance: str = "N/A"
    estimated_duration: str = "N/A"
    pickup_addresses: List[str] = Field(default_factory=list)
    routing_status: RoutingStatus = "skipped"
    estimated_distance_meters: Optional[int] = None
    estimated_duration_seconds: Optional[int] = None
    ordered_addresses: List[str] = Field(default_factory=list)


class GenerateTripsResponse(CamelModel):
    profile_id: str
    profile_name: str
    total_students: int
    available_vehicles: int
    vehicle_capacity: int
    trip_suggestions: List[TripSuggestionModel]


class ConflictCheckRequest(CamelModel):
    school_id: str
    resource_type: ResourceType
    resource_id: str
    scheduled_start_time: str
    scheduled_end_time: str
    exclude_trip_id: Optional[str] = None


class ConflictCheckResponse(CamelModel):
    has_conflict: bool
    conflict_type: Optional[ResourceType] = None
    conflicting_trip: Optional[str] = None
    message: Optional[str] = None


class CreateTripsRequest(CamelModel):
    suggestions: List[TripSuggestionModel]
    profile_id: str
    school_id: str
    trip_type: str = "pickup"
    start_time: str = "07:00"


class CreateTripsResponse(CamelModel):
    created: int
    trips: List[Dict[str, Any]]
