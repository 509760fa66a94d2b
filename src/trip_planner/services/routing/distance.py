"""Driving distance and duration between ordered points."""

from __future__ import annotations

import logging
from typing import Sequence

from ...errors import RoutingFailed
from ..maps.client import MapsClient
from .formatting import format_distance, format_duration
from .models import DistanceResult, GeoPoint, RouteLeg

logger = logging.getLogger(__name__)


def _require_point(point: GeoPoint | None, role: str) -> GeoPoint:
    if point is None or point.lat is None or point.lng is None:
        raise ValueError(f"{role.capitalize()} must have valid coordinates.")
    return point


def _read_leg(leg: dict) -> RouteLeg:
    distance = int(leg["distance"]["value"])
    duration = int(leg["duration"]["value"])
    return RouteLeg(
        distance=distance,
        duration=duration,
        distance_text=leg["distance"].get("text") or format_distance(distance),
        duration_text=leg["duration"].get("text") or format_duration(duration),
    )


def calculate_distance(
    client: MapsClient,
    origin: GeoPoint,
    destination: GeoPoint,
    waypoints: Sequence[GeoPoint] | None = None,
) -> DistanceResult:
    """Total the provider's legs for origin -> waypoints -> destination.

    Waypoints are always submitted with the optimize hint, so the returned
    ``optimized_waypoint_order`` may differ from the submitted order.
    """
    origin = _require_point(origin, "origin")
    destination = _require_point(destination, "destination")
    waypoints = [_require_point(point, "waypoint") for point in (waypoints or [])]

    data = client.directions(origin, destination, waypoints=waypoints or None, optimize=bool(waypoints))
    status = data.get("status", "UNKNOWN_ERROR")
    routes = data.get("routes") or []
    if status != "OK" or not routes:
        logger.error("Directions API failed: %s %s", status, data.get("error_message", ""))
        raise RoutingFailed(status if status != "OK" else "ZERO_RESULTS", data.get("error_message"))

    try:
        route = routes[0]
        legs = [_read_leg(leg) for leg in route.get("legs", [])]
        order = route.get("waypoint_order")
        order = list(order) if order is not None else None
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.error("Directions API returned an unreadable route: %s", exc)
        raise RoutingFailed("INVALID_RESPONSE", f"missing or malformed {exc}") from exc

    total_distance = sum(leg.distance for leg in legs)
    total_duration = sum(leg.duration for leg in legs)
    result = DistanceResult(
        distance=total_distance,
        duration=total_duration,
        distance_text=format_distance(total_distance),
        duration_text=format_duration(total_duration),
        optimized_waypoint_order=order,
        legs=legs,
    )
    logger.info("Distance calculation result: %s (%s)", result.distance_text, result.duration_text)
    return result
