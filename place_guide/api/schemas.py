# place_guide/api/schemas.py
"""Response shapes requested from the generator.

The JSON schema sent with a structured request is generated from these
models, and the reply is validated against the same model.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_RATING = 5.0


class LocationInfoPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    history: Optional[str] = None
    culture: Optional[str] = None
    attractions: Optional[List[str]] = None
    demographics: Optional[str] = None
    economy: Optional[str] = None
    climate: Optional[str] = None


class NearbyPlacePayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(min_length=1)
    description: str
    category: str
    why_interesting: str = Field(alias="whyInteresting")
    distance: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=MAX_RATING)

    @field_validator("distance", mode="before")
    @classmethod
    def _distance_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("rating", mode="before")
    @classmethod
    def _clamp_rating(cls, value: Any) -> Any:
        """Out-of-range ratings are clamped to 0..5; unparseable ones dropped."""
        if value is None:
            return None
        try:
            rating = float(value)
        except (TypeError, ValueError):
            return None
        return max(0.0, min(MAX_RATING, rating))


class NearbyLocationsPayload(BaseModel):
    locations: List[NearbyPlacePayload]


__all__ = ["LocationInfoPayload", "NearbyPlacePayload", "NearbyLocationsPayload"]
