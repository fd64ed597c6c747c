# place_guide/api/services/location_store.py
"""In-memory cache and fetch coordinator for the current location.

Holds at most one location's About info and Nearby list. Both are valid
only while ``cached_location_key`` equals the key of the queried location.
The two fetches keep separate loading/error flags and share the key, so one
tab can be ready while the other is still loading.

There is no cancellation: a fetch still in flight when the cache is cleared
or the location changes writes its result when it completes, and the shared
key ends up with whichever fetch finished last.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from place_guide.api.location_key import location_key
from place_guide.api.models import (
    DetailedLocation,
    LocationData,
    LocationInfo,
    LocationInfoResult,
    NearbyLocation,
    NearbyLocationsResult,
)
from place_guide.api.services.location_info_service import LocationInfoService

logger = logging.getLogger(__name__)

InfoFetcher = Callable[[DetailedLocation], Awaitable[LocationInfoResult]]
NearbyFetcher = Callable[[DetailedLocation], Awaitable[NearbyLocationsResult]]

INFO_FAILED = "Failed to get location information."
INFO_UNEXPECTED = "An unexpected error occurred while getting location details."
NEARBY_FAILED = "Failed to get nearby locations."
NEARBY_UNEXPECTED = "An unexpected error occurred while finding nearby locations."


class LocationStore:
    """Owns the location cache state; all mutation goes through its methods."""

    def __init__(
        self,
        info_fetcher: Optional[InfoFetcher] = None,
        nearby_fetcher: Optional[NearbyFetcher] = None,
    ):
        self._info_fetcher = info_fetcher or LocationInfoService.get_location_info
        self._nearby_fetcher = nearby_fetcher or LocationInfoService.find_nearby_interesting_locations

        self.current_location: Optional[LocationData] = None

        # About tab
        self.location_info: Optional[LocationInfo] = None
        self.location_info_loading = False
        self.location_info_error: Optional[str] = None

        # Nearby tab
        self.nearby_locations: List[NearbyLocation] = []
        self.nearby_locations_loading = False
        self.nearby_locations_error: Optional[str] = None

        self.cached_location_key: Optional[str] = None

    def set_current_location(self, location: LocationData) -> None:
        self.current_location = location

    def needs_update(self, location: LocationData) -> bool:
        return self.cached_location_key != location_key(location)

    async def fetch_location_info(self, location: LocationData) -> None:
        """Load About info for ``location`` unless it is already cached."""
        key = location_key(location)
        if self.cached_location_key == key and self.location_info:
            logger.debug(f"Location info cache hit for {key}")
            return

        self.location_info_loading = True
        self.location_info_error = None

        try:
            logger.info(f"Fetching location info for {key}")
            result = await self._info_fetcher(DetailedLocation.from_location_data(location))

            if result.success and result.data:
                self.location_info = result.data
                self.cached_location_key = key
            else:
                message = result.error.message if result.error else None
                self.location_info_error = message or INFO_FAILED
                logger.warning(f"Location info fetch failed for {key}: {self.location_info_error}")
        except Exception as e:
            logger.error(f"Unexpected error fetching location info for {key}: {e}")
            self.location_info_error = INFO_UNEXPECTED
        finally:
            self.location_info_loading = False

    async def fetch_nearby_locations(self, location: LocationData) -> None:
        """Load the Nearby list for ``location`` unless it is already cached."""
        key = location_key(location)
        if self.cached_location_key == key and len(self.nearby_locations) > 0:
            logger.debug(f"Nearby locations cache hit for {key}")
            return

        self.nearby_locations_loading = True
        self.nearby_locations_error = None

        try:
            logger.info(f"Fetching nearby locations for {key}")
            result = await self._nearby_fetcher(DetailedLocation.from_location_data(location))

            if result.success and result.data is not None:
                self.nearby_locations = result.data
                self.cached_location_key = key
            else:
                message = result.error.message if result.error else None
                self.nearby_locations_error = message or NEARBY_FAILED
                logger.warning(f"Nearby fetch failed for {key}: {self.nearby_locations_error}")
        except Exception as e:
            logger.error(f"Unexpected error fetching nearby locations for {key}: {e}")
            self.nearby_locations_error = NEARBY_UNEXPECTED
        finally:
            self.nearby_locations_loading = False

    async def refresh(self, location: LocationData) -> None:
        """Populate both tabs concurrently."""
        await asyncio.gather(
            self.fetch_location_info(location),
            self.fetch_nearby_locations(location),
        )

    def clear_cache(self) -> None:
        self.location_info = None
        self.location_info_error = None
        self.nearby_locations = []
        self.nearby_locations_error = None
        self.cached_location_key = None
        logger.debug("Cleared location cache")

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the current state."""
        return {
            "currentLocation": self.current_location.to_dict() if self.current_location else None,
            "locationInfo": self.location_info.to_dict() if self.location_info else None,
            "locationInfoLoading": self.location_info_loading,
            "locationInfoError": self.location_info_error,
            "nearbyLocations": [place.to_dict() for place in self.nearby_locations],
            "nearbyLocationsLoading": self.nearby_locations_loading,
            "nearbyLocationsError": self.nearby_locations_error,
            "cachedLocationKey": self.cached_location_key,
        }


__all__ = ["LocationStore"]
