# place_guide/api/location_key.py
"""Cache keys derived from rounded coordinates."""

from __future__ import annotations

from place_guide.api.models import LocationData

# Six fractional digits, roughly 0.11 m at the equator.
KEY_PRECISION = 6


def derive_key(lat: float, lng: float) -> str:
    """Return ``"{lat}_{lng}"`` with each axis fixed to six decimals.

    Two pairs share a key iff both axes round to the same value. Longitude
    wraparound and poles are left as-is.
    """
    return f"{lat:.{KEY_PRECISION}f}_{lng:.{KEY_PRECISION}f}"


def location_key(location: LocationData) -> str:
    return derive_key(location.lat, location.lng)


__all__ = ["derive_key", "location_key", "KEY_PRECISION"]
