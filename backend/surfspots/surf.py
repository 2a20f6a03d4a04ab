"""
SurfSpots Backend — Surf Spot Domain
======================================

What:  The Spot entity, the parameter objects the store accepts, and the
       SpotStore contract.
How:   Plain dataclasses. Store implementations signal absence with
       SpotNotFoundError and an update without fields with
       EmptySpotUpdateError; services translate both at their boundary.
Who:   Implemented by stores.spot_store.SqlSpotStore; consumed by the
       surfer, management and importing services.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from surfspots.geo.types import Bounds, Location


class SpotNotFoundError(Exception):
    """No spot exists with the requested ID."""


class EmptySpotUpdateError(Exception):
    """An update entry carried no field besides the ID."""


@dataclass(frozen=True)
class Spot:
    id: str
    name: str
    created_at: datetime
    location: Location


@dataclass(frozen=True)
class SpotSearchQuery:
    """
    Free-text search over spot names and localities.

    ``with_spot_id`` additionally matches the text against spot IDs.
    """

    query: str = ""
    with_spot_id: bool = False


@dataclass(frozen=True)
class SpotsParams:
    limit: int
    offset: int
    country_code: str = ""
    search_query: SpotSearchQuery = field(default_factory=SpotSearchQuery)
    bounds: Optional[Bounds] = None


@dataclass(frozen=True)
class SpotCreationEntry:
    name: str
    location: Location


@dataclass(frozen=True)
class SpotUpdateEntry:
    """
    Partial update of one spot.

    ``None`` means "leave unchanged"; any other value, including an empty
    string, is written.
    """

    id: str
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    locality: Optional[str] = None
    country_code: Optional[str] = None

    def has_changes(self) -> bool:
        return any(
            value is not None
            for value in (
                self.name,
                self.latitude,
                self.longitude,
                self.locality,
                self.country_code,
            )
        )


class SpotStore(ABC):
    """Persistence collaborator for spots."""

    @abstractmethod
    async def spot(self, spot_id: str) -> Spot:
        """Raises SpotNotFoundError when no spot has this ID."""

    @abstractmethod
    async def spots(self, params: SpotsParams) -> List[Spot]:
        """Return one page of spots matching the params; may be empty."""

    @abstractmethod
    async def create_spot(self, entry: SpotCreationEntry) -> Spot:
        """Insert a spot; the store assigns ``id`` and ``created_at``."""

    @abstractmethod
    async def update_spot(self, entry: SpotUpdateEntry) -> Spot:
        """
        Raises:
            EmptySpotUpdateError: the entry has no field to change.
            SpotNotFoundError: no spot has the entry's ID.
        """

    @abstractmethod
    async def delete_spot(self, spot_id: str) -> None:
        """Raises SpotNotFoundError when nothing was deleted."""

    @abstractmethod
    async def create_spots(self, entries: Sequence[SpotCreationEntry]) -> int:
        """Insert all entries atomically and return how many were inserted."""
