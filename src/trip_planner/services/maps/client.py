"""HTTP client for the Google Maps geocoding and directions APIs."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from ...errors import MapsNotConfiguredError, MapsUnavailableError
from ..routing.models import GeoPoint

logger = logging.getLogger(__name__)


class MapsClient:
    """Thin wrapper returning the provider's raw JSON payloads.

    Status interpretation belongs to the callers. There is no retry loop and
    no explicit timeout beyond httpx's default.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise MapsNotConfiguredError("Google Maps API key not configured")
        self.base_url = (base_url or settings.maps_base_url).rstrip("/")
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        # One client per call keeps the instance safe to share across worker threads.
        return httpx.Client(transport=self._transport)

    def _get_json(self, endpoint: str, params: dict[str, str]) -> dict:
        url = f"{self.base_url}/{endpoint}/json"
        query = {**params, "key": self.api_key}
        client = self._get_client()
        try:
            response = client.get(url, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise MapsUnavailableError(
                f"Maps {endpoint} request returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MapsUnavailableError(f"Failed to reach maps {endpoint} service: {exc}") from exc
        except ValueError as exc:
            raise MapsUnavailableError(f"Maps {endpoint} response was not valid JSON") from exc
        finally:
            client.close()
        if not isinstance(data, dict):
            raise MapsUnavailableError(f"Maps {endpoint} response had an unexpected shape")
        return data

    def geocode(self, address: str) -> dict:
        logger.debug("Geocoding address: %s", address)
        return self._get_json("geocode", {"address": address})

    def directions(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        waypoints: Sequence[GeoPoint] | None = None,
        optimize: bool = False,
    ) -> dict:
        params = {
            "origin": origin.as_param(),
            "destination": destination.as_param(),
        }
        if waypoints:
            encoded = "|".join(point.as_param() for point in waypoints)
            params["waypoints"] = f"optimize:true|{encoded}" if optimize else encoded
        logger.debug("Requesting directions %s -> %s (%d waypoints)", origin, destination, len(waypoints or ()))
        return self._get_json("directions", params)


def check_health(api_key: str | None = None) -> bool:
    """Probe the geocoding endpoint with a well-known address."""
    try:
        client = MapsClient(api_key=api_key)
        payload = client.geocode("1600 Amphitheatre Parkway, Mountain View, CA")
    except (MapsNotConfiguredError, MapsUnavailableError):
        return False
    return payload.get("status") == "OK"
