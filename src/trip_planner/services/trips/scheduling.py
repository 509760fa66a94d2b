"""Resource conflict checks and trip creation from accepted suggestions."""

from __future__ import annotations

from datetime import time
from typing import Any, Sequence

from ...errors import InvalidScheduleError, TripRecordError
from ...persistence.database import fetch_active_trips, insert_trips
from ...schemas.trips import ConflictCheckResponse, TripSuggestionModel

DEFAULT_TRIP_DURATION_MINUTES = 60


def parse_clock(value: Any) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a time of day."""
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise InvalidScheduleError(f"Invalid time of day '{value}'.") from exc


def windows_overlap(start: time, end: time, existing_start: time, existing_end: time) -> bool:
    return (
        (existing_start <= start < existing_end)
        or (existing_start < end <= existing_end)
        or (start <= existing_start and end >= existing_end)
    )


def check_resource_conflicts(
    school_id: str,
    resource_type: str,
    resource_id: str,
    scheduled_start_time: str,
    scheduled_end_time: str,
    exclude_trip_id: str | None = None,
) -> ConflictCheckResponse:
    """Report the first active trip already using the resource in an overlapping window."""
    start = parse_clock(scheduled_start_time)
    end = parse_clock(scheduled_end_time)
    if end < start:
        raise InvalidScheduleError("Scheduled end time must not be before the start time.")

    for trip in fetch_active_trips(school_id, resource_type, resource_id, exclude_trip_id):
        raw_start = trip.get("scheduled_start_time")
        if not raw_start:
            continue
        raw_end = trip.get("scheduled_end_time") or raw_start
        try:
            existing_start, existing_end = parse_clock(raw_start), parse_clock(raw_end)
        except InvalidScheduleError as exc:
            raise TripRecordError(f"Trip {trip.get('id')} has an unreadable schedule: {exc}") from exc
        if windows_overlap(start, end, existing_start, existing_end):
            trip_name = trip.get("trip_name") or str(trip.get("id"))
            return ConflictCheckResponse(
                has_conflict=True,
                conflict_type=resource_type,
                conflicting_trip=trip_name,
                message=(
                    f'{resource_type.capitalize()} is already assigned to "{trip_name}" '
                    f"during {raw_start} - {raw_end}"
                ),
            )
    return ConflictCheckResponse(has_conflict=False)


def trip_rows_from_suggestions(
    suggestions: Sequence[TripSuggestionModel],
    profile_id: str,
    school_id: str,
    trip_type: str = "pickup",
    start_time: str = "07:00",
) -> list[dict[str, Any]]:
    return [
        {
            "school_id": school_id,
            "route_profile_id": profile_id,
            "trip_name": suggestion.trip_name,
            "trip_code": f"T{index:02d}",
            "trip_type": trip_type,
            "scheduled_start_time": start_time,
            "estimated_duration_minutes": DEFAULT_TRIP_DURATION_MINUTES,
            "vehicle_capacity": None,
            "assigned_students_count": suggestion.student_count,
            "status": "active",
        }
        for index, suggestion in enumerate(suggestions, start=1)
    ]


def create_trips_from_suggestions(
    suggestions: Sequence[TripSuggestionModel],
    profile_id: str,
    school_id: str,
    trip_type: str = "pickup",
    start_time: str = "07:00",
) -> list[dict[str, Any]]:
    parse_clock(start_time)
    rows = trip_rows_from_suggestions(suggestions, profile_id, school_id, trip_type, start_time)
    return insert_trips(rows)
