"""Exception types raised by the trip planning services."""

from __future__ import annotations


class TripPlannerError(Exception):
    """Base class for errors surfaced to API callers as ``{"error": ...}``."""

    status_code: int = 500


class MapsNotConfiguredError(TripPlannerError, ValueError):
    """The mapping provider key is missing."""

    status_code = 500


class InvalidAddressError(TripPlannerError, ValueError):
    """An empty or blank address was submitted for geocoding."""

    status_code = 400


class MapsProviderError(TripPlannerError, ValueError):
    """The provider answered with a non-success status."""

    status_code = 400
    label = "Maps request"

    def __init__(self, status: str, detail: str | None = None) -> None:
        self.status = status
        self.detail = detail
        message = f"{self.label} failed: {status}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class GeocodingFailed(MapsProviderError):
    label = "Geocoding"


class RoutingFailed(MapsProviderError):
    label = "Directions API"


class MapsUnavailableError(TripPlannerError, ConnectionError):
    """The provider could not be reached or returned an unusable HTTP response."""

    status_code = 502


class ProfileNotFoundError(TripPlannerError, LookupError):
    status_code = 404

    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__("Route profile not found")


class RosterFetchError(TripPlannerError, RuntimeError):
    status_code = 500


class DatabaseNotConfiguredError(TripPlannerError, RuntimeError):
    status_code = 500


class InvalidScheduleError(TripPlannerError, ValueError):
    """A submitted time of day or time window cannot be used."""

    status_code = 400


class TripRecordError(TripPlannerError, RuntimeError):
    """A stored trip row holds a value that cannot be interpreted."""

    status_code = 500
