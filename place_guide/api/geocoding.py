# place_guide/api/geocoding.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import googlemaps
from place_guide.api.config import get_google_maps_api_key, get_google_maps_config
from place_guide.api.models import ErrorCode, ErrorInfo, GeocodingResult, LocationData

logger = logging.getLogger(__name__)

_gmaps: googlemaps.Client | None = None

# Browser GeolocationPositionError codes
_GEOLOCATION_ERRORS = {
    1: (ErrorCode.PERMISSION_DENIED, "Location access denied by user."),
    2: (ErrorCode.POSITION_UNAVAILABLE, "Location information is unavailable."),
    3: (ErrorCode.TIMEOUT, "Location request timed out."),
}


def _get_client() -> Optional[googlemaps.Client]:
    """Return a cached googlemaps.Client instance."""
    global _gmaps
    if _gmaps is None:
        try:
            api_key = get_google_maps_api_key()
            if not api_key:
                logger.error("No Google Maps API key found in config")
                return None
            logger.info(f"Initializing Google Maps client with key: {api_key[:10]}...")
            _gmaps = googlemaps.Client(key=api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def parse_address_components(components: List[Dict[str, Any]]) -> Dict[str, str]:
    """Pull city and locality out of Google address components.

    ``locality`` names the city, ``sublocality_level_1``/``sublocality`` the
    locality; ``administrative_area_level_2`` stands in for a missing city.
    """
    city = ""
    locality = ""

    for component in components:
        types = component.get("types", [])
        if "locality" in types:
            city = component.get("long_name", "")
        if "sublocality_level_1" in types or "sublocality" in types:
            locality = component.get("long_name", "")
        if not city and "administrative_area_level_2" in types:
            city = component.get("long_name", "")

    return {
        "city": city or "Unknown",
        "locality": locality or "Unknown",
    }


def _reverse_geocode_sync(lat: float, lng: float) -> GeocodingResult:
    client = _get_client()
    if client is None:
        return GeocodingResult(
            success=False,
            error=ErrorInfo("Geocoding service is not available.", ErrorCode.SERVICE_UNAVAILABLE),
        )

    try:
        logger.debug(f"Reverse geocoding {lat}, {lng}")
        results = client.reverse_geocode(
            (lat, lng), language=get_google_maps_config().get("language", "en")
        )
    except Exception as e:
        logger.error(f"Reverse geocoding error for {lat}, {lng}: {e}")
        return GeocodingResult(
            success=False,
            error=ErrorInfo("Failed to get location information.", ErrorCode.GEOCODING_ERROR),
        )

    if not results:
        logger.warning(f"No address found for {lat}, {lng}")
        return GeocodingResult(
            success=False,
            error=ErrorInfo("Could not find address for your location.", ErrorCode.ADDRESS_NOT_FOUND),
        )

    parts = parse_address_components(results[0].get("address_components", []))
    location = LocationData(lat=lat, lng=lng, city=parts["city"], locality=parts["locality"])
    logger.debug(f"Reverse geocoded {lat}, {lng} to {location.locality}, {location.city}")
    return GeocodingResult(success=True, data=location)


async def reverse_geocode(lat: float, lng: float) -> GeocodingResult:
    """Resolve coordinates to a ``LocationData``; never raises.

    The googlemaps client is blocking, so the lookup runs in a worker thread.
    """
    return await asyncio.to_thread(_reverse_geocode_sync, lat, lng)


def geolocation_error(code: Optional[int]) -> GeocodingResult:
    """Translate a browser geolocation failure into a failed result."""
    if not isinstance(code, int) or isinstance(code, bool):
        code = None
    error_code, message = _GEOLOCATION_ERRORS.get(
        code, (ErrorCode.UNKNOWN_ERROR, "An unknown error occurred while getting location.")
    )
    return GeocodingResult(success=False, error=ErrorInfo(message, error_code))


def geolocation_not_supported() -> GeocodingResult:
    return GeocodingResult(
        success=False,
        error=ErrorInfo("Geolocation is not supported by this browser.", ErrorCode.NOT_SUPPORTED),
    )


# Re-export for clean imports elsewhere
__all__ = [
    "reverse_geocode",
    "parse_address_components",
    "geolocation_error",
    "geolocation_not_supported",
]
