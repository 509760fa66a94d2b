"""Human-readable distance and duration strings."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def format_duration(seconds: int) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} min"


def format_distance(meters: int) -> str:
    # Decimal(float) keeps the exact stored value; ties round up.
    kilometers = Decimal(meters / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{kilometers} km"
