"""
SurfSpots Backend — Surfer Service
====================================

What:  Read-only spot lookup and search for anonymous users.
How:   Sanitize → validate (collecting every violation) → query the store.
       Free-text search never matches spot IDs for this audience.
Who:   Called by the public /spots routes.
"""

import logging
from typing import List

from surfspots.exceptions import NotFoundError, Violation
from surfspots.services.params import SpotsQuery
from surfspots.surf import Spot, SpotNotFoundError, SpotStore
from surfspots.validation import validate_condition
from surfspots.validation.conditions import string_not_empty

logger = logging.getLogger(__name__)


class SurferService:
    """Stateless; holds only its store."""

    def __init__(self, spot_store: SpotStore):
        self.spot_store = spot_store

    async def spot(self, spot_id: str) -> Spot:
        """
        Raises:
            ValidationError: blank ID.
            NotFoundError: no such spot.
        """
        spot_id = spot_id.strip()
        validate_condition(string_not_empty(spot_id), Violation.INVALID_SPOT_ID)

        try:
            return await self.spot_store.spot(spot_id)
        except SpotNotFoundError:
            raise NotFoundError(resource="spot", resource_id=spot_id)

    async def spots(self, query: SpotsQuery) -> List[Spot]:
        """Return one page of matching spots; an empty page is not an error."""
        query = query.sanitized()
        query.validate()

        spots = await self.spot_store.spots(query.to_store_params(with_spot_id=False))
        return spots or []
