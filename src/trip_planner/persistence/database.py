"""Supabase persistence for route profiles, rosters, vehicles and trips."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..db.supabase import get_supabase_client, require_supabase_client
from ..models.domain import RouteProfile, Student, Vehicle, parse_pool_criteria

STUDENT_COLUMNS = """
    id,
    year_group,
    school_id,
    profiles:user_id (
        first_name,
        last_name,
        address
    )
"""

RESOURCE_COLUMNS = {
    "driver": "driver_id",
    "vehicle": "vehicle_id",
    "attender": "attender_id",
}


def _require_client():
    return require_supabase_client(get_supabase_client())


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def profile_from_row(row: dict[str, Any]) -> RouteProfile:
    return RouteProfile(
        profile_id=str(row["id"]),
        profile_name=str(row.get("profile_name") or ""),
        school_id=_optional_str(row.get("school_id")),
        pool=parse_pool_criteria(row.get("student_pool_type"), row.get("student_pool_criteria")),
        raw=row,
    )


def student_from_row(row: dict[str, Any]) -> Student:
    # The embedded profile may come back as an object, a one-element list, or null.
    person = row.get("profiles")
    if isinstance(person, list):
        person = person[0] if person else None
    person = person if isinstance(person, dict) else {}
    return Student(
        student_id=str(row["id"]),
        school_id=_optional_str(row.get("school_id")),
        year_group=_optional_str(row.get("year_group")),
        first_name=_optional_str(person.get("first_name")),
        last_name=_optional_str(person.get("last_name")),
        address=person.get("address"),
        raw=row,
    )


def vehicle_from_row(row: dict[str, Any]) -> Vehicle:
    capacity = row.get("capacity")
    return Vehicle(
        vehicle_id=str(row["id"]),
        school_id=_optional_str(row.get("school_id")),
        capacity=int(capacity) if capacity is not None else None,
        status=_optional_str(row.get("status")),
        raw=row,
    )


def fetch_route_profile(profile_id: str) -> RouteProfile | None:
    supabase = _require_client()
    response = supabase.table("route_profiles").select("*").eq("id", profile_id).limit(1).execute()
    rows = response.data or []
    if not rows:
        return None
    return profile_from_row(rows[0])


def fetch_enrolled_students(school_id: str) -> list[Student]:
    supabase = _require_client()
    response = (
        supabase.table("students")
        .select(STUDENT_COLUMNS)
        .eq("school_id", school_id)
        .eq("is_enrolled", True)
        .execute()
    )
    return [student_from_row(row) for row in (response.data or [])]


def fetch_active_vehicles(school_id: str) -> list[Vehicle]:
    supabase = _require_client()
    response = (
        supabase.table("vehicles")
        .select("*")
        .eq("school_id", school_id)
        .eq("status", "active")
        .execute()
    )
    return [vehicle_from_row(row) for row in (response.data or [])]


def fetch_active_trips(
    school_id: str,
    resource_type: str,
    resource_id: str,
    exclude_trip_id: str | None = None,
) -> list[dict[str, Any]]:
    """Active trips of a school that already use the given driver, vehicle or attender."""
    column = RESOURCE_COLUMNS.get(resource_type)
    if column is None:
        raise ValueError(f"Unknown resource type '{resource_type}'.")
    supabase = _require_client()
    query = (
        supabase.table("transport_trips")
        .select("id, trip_name, scheduled_start_time, scheduled_end_time")
        .eq("school_id", school_id)
        .eq("status", "active")
        .eq(column, resource_id)
    )
    if exclude_trip_id:
        query = query.neq("id", exclude_trip_id)
    response = query.execute()
    return list(response.data or [])


def insert_trips(rows: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    if not rows:
        return []
    supabase = _require_client()
    response = supabase.table("transport_trips").insert(list(rows)).execute()
    created = list(response.data or [])
    logging.info(f"Inserted {len(created)} transport trips")
    return created
