"""Shared data structures for location lookups and AI-generated place info.

Keeping every entity and result type here lets the geocoding wrapper, the
info service and the location store share one definition without importing
each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Type, Union

from pydantic import BaseModel


class ErrorCode:
    """Machine-readable codes carried on ``ErrorInfo``."""

    INVALID_INPUT = "INVALID_INPUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    NOT_SUPPORTED = "NOT_SUPPORTED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    ADDRESS_NOT_FOUND = "ADDRESS_NOT_FOUND"
    API_ERROR = "API_ERROR"
    GEOCODING_ERROR = "GEOCODING_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class LocationData:
    """A reverse-geocoded position fix."""

    lat: float
    lng: float
    city: str
    locality: str

    def to_dict(self) -> dict:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "city": self.city,
            "locality": self.locality,
        }


@dataclass
class DetailedLocation:
    """Request payload handed to the info service."""

    name: str  # e.g. "Montmartre, Paris"
    latitude: float
    longitude: float
    city: Optional[str] = None
    sublocality: Optional[str] = None

    @classmethod
    def from_location_data(cls, location: LocationData) -> "DetailedLocation":
        return cls(
            name=f"{location.locality or ''}, {location.city}",
            city=location.city,
            sublocality=location.locality,
            latitude=location.lat,
            longitude=location.lng,
        )


@dataclass
class LocationInfo:
    """Descriptive record for the About tab."""

    name: str
    description: str
    history: Optional[str] = None
    culture: Optional[str] = None
    attractions: Optional[List[str]] = None
    demographics: Optional[str] = None
    economy: Optional[str] = None
    climate: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "history": self.history,
            "culture": self.culture,
            "attractions": self.attractions,
            "demographics": self.demographics,
            "economy": self.economy,
            "climate": self.climate,
        }


@dataclass
class NearbyLocation:
    """A single point of interest for the Nearby tab."""

    name: str
    description: str
    category: str
    why_interesting: str
    distance: Optional[str] = None
    rating: Optional[float] = None  # 0..5

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "distance": self.distance,
            "rating": self.rating,
            "whyInteresting": self.why_interesting,
        }


@dataclass
class ErrorInfo:
    message: str
    code: Optional[str] = None

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code}


@dataclass
class LocationInfoResult:
    success: bool
    data: Optional[LocationInfo] = None
    error: Optional[ErrorInfo] = None


@dataclass
class NearbyLocationsResult:
    success: bool
    data: Optional[List[NearbyLocation]] = None
    error: Optional[ErrorInfo] = None


@dataclass
class GeocodingResult:
    success: bool
    data: Optional[LocationData] = None
    error: Optional[ErrorInfo] = None


@dataclass
class GenerationOptions:
    """Options bag for a single generator call."""

    model: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    schema: Optional[Type[BaseModel]] = None  # reply model; its JSON schema is sent


@dataclass
class Structured:
    """Generator reply that validated against the requested schema."""

    data: BaseModel


@dataclass
class Text:
    """Generator reply that is free-form prose."""

    text: str = ""


Generation = Union[Structured, Text]
