"""
SurfSpots Backend — Spot Request/Response Schemas
===================================================

What:  Pydantic models defining the spot API contract.
How:   Request bodies use lenient types (plain str / float) so that domain
       validation happens in the services and every invalid field is
       reported at once. Responses are built from domain objects.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from surfspots.geo.types import Location
from surfspots.surf import Spot


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class LocationResponse(BaseModel):
    locality: str = Field(description="Most specific place name")
    country_code: str = Field(description="Lowercase ISO 3166-1 alpha-2 code")
    latitude: float
    longitude: float

    @classmethod
    def from_location(cls, location: Location) -> "LocationResponse":
        return cls(
            locality=location.locality,
            country_code=location.country_code,
            latitude=location.coordinates.latitude,
            longitude=location.coordinates.longitude,
        )


class SpotResponse(BaseModel):
    id: str = Field(description="Unique spot identifier")
    name: str
    created_at: datetime = Field(description="When the spot was created (UTC ISO 8601)")
    location: LocationResponse

    @classmethod
    def from_spot(cls, spot: Spot) -> "SpotResponse":
        return cls(
            id=spot.id,
            name=spot.name,
            created_at=spot.created_at,
            location=LocationResponse.from_location(spot.location),
        )


class SpotsResponse(BaseModel):
    """One page of spots; ``items`` is empty when nothing matches."""

    items: List[SpotResponse] = Field(default_factory=list)

    @classmethod
    def from_spots(cls, spots: List[Spot]) -> "SpotsResponse":
        return cls(items=[SpotResponse.from_spot(spot) for spot in spots])


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateSpotRequest(BaseModel):
    name: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    locality: str = ""
    country_code: str = ""


class UpdateSpotRequest(BaseModel):
    """Omitted or null fields are left unchanged."""

    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    locality: Optional[str] = None
    country_code: Optional[str] = None
