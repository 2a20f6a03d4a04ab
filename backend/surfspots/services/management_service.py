"""
SurfSpots Backend — Management Service
========================================

What:  Spot CRUD and reverse geocoding for administrators.
How:   Same sanitize → validate → delegate pipeline as the surfer service,
       except free-text search also matches spot IDs. Store and location
       source errors are translated here into NotFoundError / EmptyUpdateError.
Who:   Called by the /management routes (admin role enforced by the router).

Error mapping:
    SpotNotFoundError      → NotFoundError("spot")
    EmptySpotUpdateError   → EmptyUpdateError
    LocationNotFoundError  → NotFoundError("location")
    anything else          → propagated unchanged
"""

import logging
from typing import List

from surfspots.exceptions import EmptyUpdateError, NotFoundError, Violation
from surfspots.geo.source import LocationNotFoundError, LocationSource
from surfspots.geo.types import Coordinates, Location
from surfspots.services.params import CreateSpotParams, SpotsQuery, UpdateSpotParams
from surfspots.surf import EmptySpotUpdateError, Spot, SpotNotFoundError, SpotStore
from surfspots.validation import Validator, validate_condition
from surfspots.validation import conditions as c

logger = logging.getLogger(__name__)


class ManagementService:
    def __init__(self, spot_store: SpotStore, location_source: LocationSource):
        self.spot_store = spot_store
        self.location_source = location_source

    async def spot(self, spot_id: str) -> Spot:
        spot_id = spot_id.strip()
        validate_condition(c.string_not_empty(spot_id), Violation.INVALID_SPOT_ID)

        try:
            return await self.spot_store.spot(spot_id)
        except SpotNotFoundError:
            raise NotFoundError(resource="spot", resource_id=spot_id)

    async def spots(self, query: SpotsQuery) -> List[Spot]:
        query = query.sanitized()
        query.validate()

        spots = await self.spot_store.spots(query.to_store_params(with_spot_id=True))
        return spots or []

    async def create_spot(self, params: CreateSpotParams) -> Spot:
        """
        Validate name, country code, locality, latitude and longitude together
        and create the spot; the store assigns its ID and creation time.
        """
        params = params.sanitized()
        params.validate()

        spot = await self.spot_store.create_spot(params.to_entry())
        logger.info("Spot %s created by management", spot.id)
        return spot

    async def update_spot(self, params: UpdateSpotParams) -> Spot:
        """
        Apply a partial update; absent fields are left untouched.

        Raises:
            ValidationError: blank ID or an invalid present field.
            EmptyUpdateError: no field besides the ID was given.
            NotFoundError: no such spot.
        """
        params = params.sanitized()
        params.validate()

        try:
            return await self.spot_store.update_spot(params.to_entry())
        except EmptySpotUpdateError:
            raise EmptyUpdateError(context={"spot_id": params.id})
        except SpotNotFoundError:
            raise NotFoundError(resource="spot", resource_id=params.id)

    async def delete_spot(self, spot_id: str) -> None:
        spot_id = spot_id.strip()
        validate_condition(c.string_not_empty(spot_id), Violation.INVALID_SPOT_ID)

        try:
            await self.spot_store.delete_spot(spot_id)
        except SpotNotFoundError:
            raise NotFoundError(resource="spot", resource_id=spot_id)

    async def location(self, coordinates: Coordinates) -> Location:
        """Reverse-geocode coordinates after validating both axes independently."""
        v = Validator()
        v.if_false(c.is_latitude(coordinates.latitude), Violation.INVALID_LATITUDE)
        v.if_false(c.is_longitude(coordinates.longitude), Violation.INVALID_LONGITUDE)
        v.validate()

        try:
            return await self.location_source.location(coordinates)
        except LocationNotFoundError:
            raise NotFoundError(resource="location")
