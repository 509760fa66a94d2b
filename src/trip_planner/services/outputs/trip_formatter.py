"""Serializers for trip generation outputs."""

from __future__ import annotations

import csv
import io

from ...schemas.trips import GenerateTripsResponse


def trip_run_to_json(response: GenerateTripsResponse) -> dict:
    return response.model_dump(by_alias=True)


def trip_run_to_csv(response: GenerateTripsResponse) -> str:
    """One row per student, tagged with the trip it was placed on."""
    buffer = io.StringIO()
    fieldnames = [
        "trip_number",
        "trip_name",
        "student_id",
        "student_count",
        "stops",
        "estimated_distance",
        "estimated_duration",
        "routing_status",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for trip in response.trip_suggestions:
        for student_id in trip.students:
            writer.writerow(
                {
                    "trip_number": trip.trip_number,
                    "trip_name": trip.trip_name,
                    "student_id": student_id,
                    "student_count": trip.student_count,
                    "stops": trip.stops,
                    "estimated_distance": trip.estimated_distance,
                    "estimated_duration": trip.estimated_duration,
                    "routing_status": trip.routing_status,
                }
            )
    return buffer.getvalue()
