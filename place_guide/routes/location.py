# place_guide/routes/location.py
"""Location routes and blueprint configuration."""

import logging
import math

from flask import Blueprint, jsonify, request

from place_guide.api.config import get_google_maps_api_key
from place_guide.api.geocoding import (
    geolocation_error,
    geolocation_not_supported,
    reverse_geocode,
)
from place_guide.api.models import ErrorCode

logger = logging.getLogger(__name__)

_STATUS_BY_CODE = {
    ErrorCode.NOT_SUPPORTED: 400,
    ErrorCode.PERMISSION_DENIED: 400,
    ErrorCode.POSITION_UNAVAILABLE: 400,
    ErrorCode.TIMEOUT: 400,
    ErrorCode.UNKNOWN_ERROR: 400,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.ADDRESS_NOT_FOUND: 404,
}


def _parse_coordinate(value, low, high):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not low <= number <= high:
        return None
    return number


def create_location_blueprint(store):
    """Create and configure the location blueprint.

    Args:
        store: LocationStore shared by every request of this app

    Returns:
        Configured Flask Blueprint
    """
    location_bp = Blueprint("location", __name__, url_prefix="/location")

    def _no_location():
        return jsonify({"error": "No current location set"}), 409

    @location_bp.route("/api/config")
    def api_config():
        """Return Google Maps configuration for frontend."""
        api_key = get_google_maps_api_key()
        if api_key:
            return jsonify({
                "auth_type": "api_key",
                "google_maps_api_key": api_key,
            })
        return jsonify({"error": "No Google Maps API key configured"}), 500

    @location_bp.route("/api/position", methods=["POST"])
    async def api_position():
        """Accept a browser position fix (or its failure) and reverse geocode it."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        if data.get("supported") is False:
            result = geolocation_not_supported()
        elif "error_code" in data:
            result = geolocation_error(data.get("error_code"))
        else:
            lat = _parse_coordinate(data.get("lat"), -90, 90)
            lng = _parse_coordinate(data.get("lng"), -180, 180)
            if lat is None or lng is None:
                return jsonify({"error": "lat and lng must be valid coordinates"}), 400
            result = await reverse_geocode(lat, lng)

        if not result.success:
            logger.warning(f"Position update failed: {result.error.code} {result.error.message}")
            status = _STATUS_BY_CODE.get(result.error.code, 502)
            return jsonify({"error": result.error.to_dict()}), status

        store.set_current_location(result.data)
        return jsonify({
            "location": result.data.to_dict(),
            "needsUpdate": store.needs_update(result.data),
        })

    @location_bp.route("/api/state")
    def api_state():
        return jsonify(store.snapshot())

    @location_bp.route("/api/about", methods=["POST"])
    async def api_about():
        """Load the About tab for the current location."""
        if store.current_location is None:
            return _no_location()
        await store.fetch_location_info(store.current_location)
        return jsonify(store.snapshot())

    @location_bp.route("/api/nearby", methods=["POST"])
    async def api_nearby():
        """Load the Nearby tab for the current location."""
        if store.current_location is None:
            return _no_location()
        await store.fetch_nearby_locations(store.current_location)
        return jsonify(store.snapshot())

    @location_bp.route("/api/refresh", methods=["POST"])
    async def api_refresh():
        """Load both tabs at once."""
        if store.current_location is None:
            return _no_location()
        await store.refresh(store.current_location)
        return jsonify(store.snapshot())

    @location_bp.route("/api/cache", methods=["DELETE"])
    def api_clear_cache():
        store.clear_cache()
        return jsonify(store.snapshot())

    @location_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "location"})

    return location_bp


__all__ = ['create_location_blueprint']
