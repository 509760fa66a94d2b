"""Route group exports."""

from . import health, routing, trips

__all__ = ["routing", "trips", "health"]
