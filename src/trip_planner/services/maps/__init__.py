"""Mapping provider access."""

from .client import MapsClient, check_health

__all__ = ["MapsClient", "check_health"]
