"""
SurfSpots Backend — Location Source Interface
===============================================

What:  Abstract contract for reverse-geocoding providers.
How:   Concrete implementations inherit from LocationSource and implement
       location(). A well-formed "nothing here" answer is signalled with
       LocationNotFoundError; provider failures raise LocationSourceError.
Who:   Called by ManagementService.location().
"""

from abc import ABC, abstractmethod

from surfspots.geo.types import Coordinates, Location


class LocationNotFoundError(Exception):
    """The provider answered, but knows no location at the given coordinates."""


class LocationSource(ABC):
    """
    Reverse-geocoding collaborator.

    Implementations:
        - NominatimLocationSource: OpenStreetMap Nominatim over HTTP
    """

    @abstractmethod
    async def location(self, coordinates: Coordinates) -> Location:
        """
        Resolve coordinates to a locality and country.

        Returns:
            Location whose coordinates are the ones passed in.

        Raises:
            LocationNotFoundError: No location exists at the coordinates.
            LocationSourceError: The provider could not be reached or
                returned an unusable response.
        """
        ...
