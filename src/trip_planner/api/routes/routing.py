"""Geocoding, distance and stop-ordering endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from ...schemas.routing import (
    DistanceRequest,
    DistanceResponse,
    GeocodeRequest,
    GeocodeResponse,
    LegModel,
    OptimizeRequest,
    OptimizeResponse,
    StopModel,
)
from ...services.maps.client import MapsClient
from ...services.routing.distance import calculate_distance
from ...services.routing.geocoding import Geocoder
from ...services.routing.models import GeoPoint, Stop
from ...services.routing.optimizer import optimize_waypoints

router = APIRouter(prefix="/routes", tags=["routes"])
logger = logging.getLogger(__name__)


@router.post("/geocode", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
def geocode(payload: GeocodeRequest) -> GeocodeResponse:
    logger.info("Route optimizer request: geocode")
    result = Geocoder(MapsClient(), cache=False).geocode(payload.address)
    return GeocodeResponse(lat=result.lat, lng=result.lng, formatted_address=result.formatted_address)


@router.post("/calculate-distance", response_model=DistanceResponse, status_code=status.HTTP_200_OK)
def distance(payload: DistanceRequest) -> DistanceResponse:
    logger.info("Route optimizer request: calculate_distance")
    result = calculate_distance(
        MapsClient(),
        GeoPoint(payload.origin.lat, payload.origin.lng),
        GeoPoint(payload.destination.lat, payload.destination.lng),
        waypoints=[GeoPoint(point.lat, point.lng) for point in payload.waypoints or []],
    )
    return DistanceResponse(
        distance=result.distance,
        duration=result.duration,
        distance_text=result.distance_text,
        duration_text=result.duration_text,
        optimized_waypoint_order=result.optimized_waypoint_order,
    )


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRequest) -> OptimizeResponse:
    logger.info("Route optimizer request: optimize")
    client = MapsClient()
    stops = [
        Stop(
            id=stop.id,
            name=stop.name,
            address=stop.address,
            latitude=stop.latitude,
            longitude=stop.longitude,
            estimated_students=stop.estimated_students,
        )
        for stop in payload.stops
    ]
    route = optimize_waypoints(stops, Geocoder(client), client)
    return OptimizeResponse(
        optimized_stops=[
            StopModel(
                id=stop.id,
                name=stop.name,
                address=stop.address,
                latitude=stop.latitude,
                longitude=stop.longitude,
                estimated_students=stop.estimated_students,
            )
            for stop in route.optimized_stops
        ],
        total_distance=route.total_distance,
        total_duration=route.total_duration,
        distance_text=route.distance_text,
        duration_text=route.duration_text,
        legs=[
            LegModel(from_stop=leg.from_stop, to_stop=leg.to_stop, distance=leg.distance, duration=leg.duration)
            for leg in route.legs
        ],
    )
