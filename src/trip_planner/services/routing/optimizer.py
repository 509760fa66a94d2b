"""Waypoint ordering for multi-stop trips."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ...errors import InvalidAddressError, MapsProviderError, MapsUnavailableError
from ..maps.client import MapsClient
from .distance import calculate_distance
from .formatting import format_distance, format_duration
from .geocoding import Geocoder
from .models import LegSummary, OptimizedRoute, RouteLeg, Stop

logger = logging.getLogger(__name__)


def geocode_stops(stops: Sequence[Stop], geocoder: Geocoder) -> list[Stop]:
    """Return copies of ``stops`` with coordinates filled in where possible.

    A stop that cannot be geocoded is returned unchanged (still without
    coordinates) and a warning is logged.
    """
    resolved: list[Stop] = []
    for stop in stops:
        if stop.has_coordinates:
            resolved.append(stop)
            continue
        try:
            location = geocoder.geocode(stop.address)
        except (InvalidAddressError, MapsProviderError, MapsUnavailableError) as exc:
            logger.warning("Could not geocode stop '%s': %s", stop.name, exc)
            resolved.append(stop)
            continue
        resolved.append(replace(stop, latitude=location.lat, longitude=location.lng))
    return resolved


def _waypoint_order(order: list[int] | None, count: int) -> list[int]:
    identity = list(range(count))
    if order is None:
        logger.warning("Provider returned no waypoint order; keeping submitted order")
        return identity
    if sorted(order) != identity:
        logger.warning("Provider waypoint order %s is not a permutation of %d waypoints; keeping submitted order", order, count)
        return identity
    return list(order)


def _leg_summaries(stops: Sequence[Stop], legs: Sequence[RouteLeg]) -> list[LegSummary]:
    summaries = []
    for idx, leg in enumerate(legs):
        to_stop = stops[idx + 1].name if idx + 1 < len(stops) else None
        summaries.append(
            LegSummary(
                from_stop=stops[idx].name if idx < len(stops) else "",
                to_stop=to_stop,
                distance=leg.distance_text,
                duration=leg.duration_text,
            )
        )
    return summaries


def optimize_waypoints(stops: Sequence[Stop], geocoder: Geocoder, client: MapsClient) -> OptimizedRoute:
    """Order ``stops`` for the shortest drive between the first and last stop.

    The first and last usable stops stay fixed; every stop in between is
    handed to the provider for reordering and its answer is applied as-is.
    Raises ``RoutingFailed`` or ``MapsUnavailableError`` when the directions
    request itself fails.
    """
    logger.info("Optimizing route for %d stops", len(stops))
    geocoded = geocode_stops(stops, geocoder)
    valid = [stop for stop in geocoded if stop.has_coordinates]
    dropped = len(geocoded) - len(valid)
    if dropped:
        logger.warning("Dropped %d stop(s) without coordinates from routing", dropped)

    if len(valid) < 2:
        return OptimizedRoute(
            optimized_stops=valid,
            total_distance=0,
            total_duration=0,
            distance_text=format_distance(0),
            duration_text=format_duration(0),
        )

    origin, destination = valid[0], valid[-1]
    waypoints = valid[1:-1]

    if not waypoints:
        direct = calculate_distance(client, origin.point(), destination.point())
        return OptimizedRoute(
            optimized_stops=valid,
            total_distance=direct.distance,
            total_duration=direct.duration,
            distance_text=direct.distance_text,
            duration_text=direct.duration_text,
            legs=_leg_summaries(valid, direct.legs),
        )

    result = calculate_distance(
        client,
        origin.point(),
        destination.point(),
        waypoints=[stop.point() for stop in waypoints],
    )
    order = _waypoint_order(result.optimized_waypoint_order, len(waypoints))
    optimized_stops = [origin, *(waypoints[idx] for idx in order), destination]

    logger.info("Route optimization complete. Distance: %d Duration: %d", result.distance, result.duration)
    return OptimizedRoute(
        optimized_stops=optimized_stops,
        total_distance=result.distance,
        total_duration=result.duration,
        distance_text=result.distance_text,
        duration_text=result.duration_text,
        legs=_leg_summaries(optimized_stops, result.legs),
    )
