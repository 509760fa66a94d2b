"""Address to coordinate resolution."""

from __future__ import annotations

import logging
import threading

from ...errors import GeocodingFailed, InvalidAddressError
from ..maps.client import MapsClient
from .models import GeocodeResult

logger = logging.getLogger(__name__)


def normalize_address(address: str) -> str:
    return " ".join(address.lower().split())


class Geocoder:
    """Resolve free-text addresses through the provider.

    Successful results are memoised per normalised address when ``cache`` is
    enabled; failures always go back to the provider on the next call.
    """

    def __init__(self, client: MapsClient, cache: bool = True) -> None:
        self.client = client
        self.cache_enabled = cache
        self._cache: dict[str, GeocodeResult] = {}
        self._lock = threading.Lock()

    def geocode(self, address: str) -> GeocodeResult:
        if address is None or not address.strip():
            raise InvalidAddressError("Address is required for geocoding")

        key = normalize_address(address)
        if self.cache_enabled:
            with self._lock:
                cached = self._cache.get(key)
            if cached is not None:
                return cached

        data = self.client.geocode(address.strip())
        status = data.get("status", "UNKNOWN_ERROR")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.error("Geocoding failed: %s %s", status, data.get("error_message", ""))
            raise GeocodingFailed(status if status != "OK" else "ZERO_RESULTS", data.get("error_message"))

        try:
            first = results[0]
            location = first["geometry"]["location"]
            result = GeocodeResult(
                lat=float(location["lat"]),
                lng=float(location["lng"]),
                formatted_address=first.get("formatted_address", address.strip()),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Geocoding returned an unreadable result for %r: %s", address, exc)
            raise GeocodingFailed("INVALID_RESPONSE", f"missing or malformed {exc}") from exc
        if self.cache_enabled:
            with self._lock:
                self._cache[key] = result
        return result

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
