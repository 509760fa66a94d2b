"""Trip generation and trip administration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.trips import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    CreateTripsRequest,
    CreateTripsResponse,
    GenerateTripsRequest,
    GenerateTripsResponse,
)
from ...services.trips.scheduling import check_resource_conflicts, create_trips_from_suggestions
from ...services.trips.service import generate_trips

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/generate", response_model=GenerateTripsResponse, status_code=status.HTTP_200_OK)
def generate(payload: GenerateTripsRequest) -> GenerateTripsResponse:
    return generate_trips(
        payload.profile_id,
        payload.school_id,
        payload.vehicle_capacity,
        persist=payload.persist,
    )


@router.post("/conflicts", response_model=ConflictCheckResponse, status_code=status.HTTP_200_OK)
def conflicts(payload: ConflictCheckRequest) -> ConflictCheckResponse:
    return check_resource_conflicts(
        school_id=payload.school_id,
        resource_type=payload.resource_type,
        resource_id=payload.resource_id,
        scheduled_start_time=payload.scheduled_start_time,
        scheduled_end_time=payload.scheduled_end_time,
        exclude_trip_id=payload.exclude_trip_id,
    )


@router.post("/from-suggestions", response_model=CreateTripsResponse, status_code=status.HTTP_201_CREATED)
def create_from_suggestions(payload: CreateTripsRequest) -> CreateTripsResponse:
    trips = create_trips_from_suggestions(
        payload.suggestions,
        profile_id=payload.profile_id,
        school_id=payload.school_id,
        trip_type=payload.trip_type,
        start_time=payload.start_time,
    )
    return CreateTripsResponse(created=len(trips), trips=trips)
