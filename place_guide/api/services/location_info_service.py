# place_guide/api/services/location_info_service.py
"""Service layer for AI-generated place descriptions and nearby suggestions."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from place_guide.api.config import get_ai_config, get_nearby_defaults
from place_guide.api.llm import (
    generate_object,
    process_prompt_template,
    read_prompt_template,
)
from place_guide.api.models import (
    DetailedLocation,
    ErrorCode,
    ErrorInfo,
    Generation,
    GenerationOptions,
    LocationInfo,
    LocationInfoResult,
    NearbyLocation,
    NearbyLocationsResult,
    Structured,
)
from place_guide.api.schemas import LocationInfoPayload, NearbyLocationsPayload

logger = logging.getLogger(__name__)


def _optional_text(value: Optional[str]) -> Optional[str]:
    return value or None


class LocationInfoService:
    """Builds prompts, calls the generator and normalises its replies."""

    @staticmethod
    def _invalid_input() -> ErrorInfo:
        return ErrorInfo(message="Location name is required.", code=ErrorCode.INVALID_INPUT)

    @staticmethod
    def _has_name(location: Optional[DetailedLocation]) -> bool:
        return bool(location and location.name and location.name.strip())

    @staticmethod
    def _base_replacements(location: DetailedLocation) -> Dict[str, str]:
        return {
            "location": location.name,
            "city": location.city or "Not specified",
            "sublocality": location.sublocality or "Not specified",
            "latitude": str(location.latitude),
            "longitude": str(location.longitude),
        }

    @staticmethod
    def to_location_info(generation: Generation, location: DetailedLocation) -> LocationInfo:
        """Normalise either generator reply into a ``LocationInfo``.

        A ``Text`` reply becomes the degraded form: the request name plus the
        prose as description.
        """
        if not isinstance(generation, Structured):
            return LocationInfo(name=location.name, description=generation.text)

        payload: LocationInfoPayload = generation.data
        attractions = None
        if payload.attractions is not None:
            attractions = [item for item in payload.attractions if item]

        return LocationInfo(
            name=payload.name,
            description=payload.description,
            history=_optional_text(payload.history),
            culture=_optional_text(payload.culture),
            attractions=attractions,
            demographics=_optional_text(payload.demographics),
            economy=_optional_text(payload.economy),
            climate=_optional_text(payload.climate),
        )

    @staticmethod
    def to_nearby_locations(generation: Generation, location: DetailedLocation) -> List[NearbyLocation]:
        """Normalise either generator reply into an ordered list of places.

        A ``Text`` reply becomes a single ``mixed`` entry carrying the prose.
        """
        if not isinstance(generation, Structured):
            return [
                NearbyLocation(
                    name=f"Nearby locations for {location.name}",
                    description=generation.text,
                    category="mixed",
                    why_interesting="Various interesting locations found through AI reasoning",
                )
            ]

        payload: NearbyLocationsPayload = generation.data
        return [
            NearbyLocation(
                name=place.name,
                description=place.description,
                category=place.category,
                why_interesting=place.why_interesting,
                distance=_optional_text(place.distance),
                rating=place.rating,
            )
            for place in payload.locations
        ]

    @staticmethod
    async def get_location_info(location: DetailedLocation) -> LocationInfoResult:
        """Get descriptive information about a place.

        Args:
            location: Place name, city, sublocality and coordinates

        Returns:
            Tagged result; never raises
        """
        if not LocationInfoService._has_name(location):
            return LocationInfoResult(success=False, error=LocationInfoService._invalid_input())

        try:
            settings = get_ai_config()["about"]
            prompt = process_prompt_template(
                read_prompt_template("about.txt"),
                LocationInfoService._base_replacements(location),
            )

            logger.info(f"Requesting location info for {location.name}")
            generation = await generate_object(
                prompt,
                GenerationOptions(
                    model=settings["model"],
                    temperature=settings["temperature"],
                    max_tokens=settings["max_tokens"],
                    schema=LocationInfoPayload,
                ),
            )

            return LocationInfoResult(
                success=True,
                data=LocationInfoService.to_location_info(generation, location),
            )

        except Exception as e:
            logger.error(f"Error getting location info: {e}")
            return LocationInfoResult(
                success=False,
                error=ErrorInfo(
                    message="Failed to get location information. Please try again.",
                    code=ErrorCode.API_ERROR,
                ),
            )

    @staticmethod
    async def find_nearby_interesting_locations(
        location: DetailedLocation,
        radius: Optional[str] = None,
        interests: Optional[List[str]] = None,
    ) -> NearbyLocationsResult:
        """Find interesting places around a location.

        Args:
            location: Place name, city, sublocality and coordinates
            radius: Search radius, e.g. "10 km" (configured default if omitted)
            interests: Interest categories (configured defaults if omitted)

        Returns:
            Tagged result; never raises
        """
        if not LocationInfoService._has_name(location):
            return NearbyLocationsResult(success=False, error=LocationInfoService._invalid_input())

        try:
            defaults = get_nearby_defaults()
            radius = radius or defaults["radius"]
            interests = interests if interests is not None else defaults["interests"]
            settings = get_ai_config()["nearby"]

            replacements = LocationInfoService._base_replacements(location)
            replacements["radius"] = radius
            replacements["interests"] = ", ".join(interests)
            prompt = process_prompt_template(read_prompt_template("nearby.txt"), replacements)

            logger.info(f"Requesting nearby locations for {location.name} within {radius}")
            generation = await generate_object(
                prompt,
                GenerationOptions(
                    model=settings["model"],
                    temperature=settings["temperature"],
                    max_tokens=settings["max_tokens"],
                    schema=NearbyLocationsPayload,
                ),
            )

            return NearbyLocationsResult(
                success=True,
                data=LocationInfoService.to_nearby_locations(generation, location),
            )

        except Exception as e:
            logger.error(f"Error finding nearby locations: {e}")
            return NearbyLocationsResult(
                success=False,
                error=ErrorInfo(
                    message="Failed to find nearby locations. Please try again.",
                    code=ErrorCode.API_ERROR,
                ),
            )

    @staticmethod
    async def get_location_package(
        location: DetailedLocation,
        radius: Optional[str] = None,
        interests: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Run both lookups in parallel.

        Returns:
            ``{"location_info": LocationInfoResult, "nearby_locations": NearbyLocationsResult}``
        """
        location_info, nearby_locations = await asyncio.gather(
            LocationInfoService.get_location_info(location),
            LocationInfoService.find_nearby_interesting_locations(location, radius, interests),
        )
        return {
            "location_info": location_info,
            "nearby_locations": nearby_locations,
        }


# Export for use in other modules
__all__ = ["LocationInfoService"]
