"""Trip suggestion orchestration service."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ...config import settings
from ...errors import (
    DatabaseNotConfiguredError,
    MapsProviderError,
    MapsUnavailableError,
    ProfileNotFoundError,
    RosterFetchError,
)
from ...models.domain import RouteProfile
from ...persistence.database import fetch_active_vehicles, fetch_enrolled_students, fetch_route_profile
from ...persistence.filesystem import RunExporter
from ...schemas.trips import GenerateTripsResponse, TripSuggestionModel
from ..maps.client import MapsClient
from ..outputs.trip_formatter import trip_run_to_csv, trip_run_to_json
from ..routing.geocoding import Geocoder
from ..routing.models import Stop
from ..routing.optimizer import optimize_waypoints
from .partitioner import StudentGroup, filter_eligible, group_by_address, partition_students

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def trip_name(profile: RouteProfile, trip_number: int) -> str:
    return f"{profile.profile_name} - Trip {trip_number}"


def build_stops(group: StudentGroup) -> list[Stop]:
    """One stop per unique routable address in the group."""
    return [
        Stop(
            id=f"stop-{idx}",
            name=f"Stop {idx + 1}",
            address=address,
            estimated_students=group.address_counts[address],
        )
        for idx, address in enumerate(group.pickup_addresses)
    ]


def _suggest_trip(
    trip_number: int,
    group: StudentGroup,
    profile: RouteProfile,
    geocoder: Geocoder,
    maps_client: MapsClient,
) -> TripSuggestionModel:
    stops = build_stops(group)
    suggestion = TripSuggestionModel(
        trip_number=trip_number,
        trip_name=trip_name(profile, trip_number),
        student_count=group.size,
        stops=len(stops),
        students=[student.student_id for student in group.members],
        pickup_addresses=group.pickup_addresses,
        ordered_addresses=[stop.address for stop in stops],
    )
    if group.unknown_count:
        logger.info(
            "Trip %d carries %d student(s) under %r, not routed",
            trip_number,
            group.unknown_count,
            settings.unknown_address_label,
        )
    if len(stops) < 2:
        return suggestion

    try:
        route = optimize_waypoints(stops, geocoder, maps_client)
    except (MapsProviderError, MapsUnavailableError) as exc:
        logger.error("Route optimization error for trip %d: %s", trip_number, exc)
        suggestion.routing_status = "failed"
        return suggestion

    if not route.routed:
        logger.error(
            "Trip %d has %d geocodable stop(s); distance left as %s",
            trip_number,
            len(route.optimized_stops),
            NOT_AVAILABLE,
        )
        suggestion.routing_status = "failed"
        return suggestion

    suggestion.routing_status = "ok"
    suggestion.estimated_distance = route.distance_text
    suggestion.estimated_duration = route.duration_text
    suggestion.estimated_distance_meters = route.total_distance
    suggestion.estimated_duration_seconds = route.total_duration
    suggestion.ordered_addresses = [stop.address for stop in route.optimized_stops]
    return suggestion


def _suggest_trips(
    groups: Sequence[StudentGroup],
    profile: RouteProfile,
    geocoder: Geocoder,
    maps_client: MapsClient,
) -> list[TripSuggestionModel]:
    workers = min(settings.trip_max_parallel_groups, len(groups))
    if workers <= 1:
        return [
            _suggest_trip(number, group, profile, geocoder, maps_client)
            for number, group in enumerate(groups, start=1)
        ]

    logger.info("Routing %d trips with %d workers", len(groups), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in submission order, so trip numbering is preserved.
        return list(
            executor.map(
                lambda numbered: _suggest_trip(numbered[0], numbered[1], profile, geocoder, maps_client),
                enumerate(groups, start=1),
            )
        )


def _load_profile(profile_id: str) -> RouteProfile:
    try:
        profile = fetch_route_profile(profile_id)
    except DatabaseNotConfiguredError:
        raise
    except Exception as exc:
        logger.error("Profile error: %s", exc)
        raise ProfileNotFoundError(profile_id) from exc
    if profile is None:
        raise ProfileNotFoundError(profile_id)
    return profile


def _count_vehicles(school_id: str) -> int:
    try:
        return len(fetch_active_vehicles(school_id))
    except Exception as exc:
        logger.warning("Error fetching vehicles for school %s: %s", school_id, exc)
        return 0


def _export_run(response: GenerateTripsResponse) -> None:
    try:
        run_dir = RunExporter().export(
            prefix=f"trips_{response.profile_id}",
            summary=trip_run_to_json(response),
            rows_csv=trip_run_to_csv(response),
        )
        logger.info("Exported trip run to %s", run_dir)
    except OSError as exc:
        logger.error("Failed to export trip run for profile %s: %s", response.profile_id, exc)


def generate_trips(
    profile_id: str,
    school_id: str,
    vehicle_capacity: int | None = None,
    *,
    persist: bool = False,
) -> GenerateTripsResponse:
    """Suggest vehicle trips for every student eligible under a route profile.

    Profile lookup, roster fetch and missing provider credentials abort the
    run. Geocoding or routing problems only degrade the affected trip.
    """
    logger.info("Generating trips for profile: %s", profile_id)
    maps_client = MapsClient()
    geocoder = Geocoder(maps_client, cache=settings.geocode_cache_enabled)

    profile = _load_profile(profile_id)
    logger.info("Profile found: %s Pool: %s", profile.profile_name, type(profile.pool).__name__)

    try:
        students = fetch_enrolled_students(school_id)
    except DatabaseNotConfiguredError:
        raise
    except Exception as exc:
        logger.error("Error fetching students: %s", exc)
        raise RosterFetchError("Failed to fetch students") from exc
    logger.info("Found %d enrolled students", len(students))

    eligible = filter_eligible(students, profile.pool)
    logger.info("Filtered to %d eligible students", len(eligible))
    logger.info("Grouped into %d unique addresses", len(group_by_address(eligible)))

    available_vehicles = _count_vehicles(school_id)
    capacity = vehicle_capacity if vehicle_capacity is not None else settings.default_vehicle_capacity
    groups = partition_students(eligible, capacity)
    logger.info("Trips needed: %d for %d students with capacity %d", len(groups), len(eligible), capacity)

    suggestions = _suggest_trips(groups, profile, geocoder, maps_client)
    logger.info("Generated %d trip suggestions", len(suggestions))

    response = GenerateTripsResponse(
        profile_id=profile_id,
        profile_name=profile.profile_name,
        total_students=len(eligible),
        available_vehicles=available_vehicles,
        vehicle_capacity=capacity,
        trip_suggestions=suggestions,
    )
    if persist:
        _export_run(response)
    return response
