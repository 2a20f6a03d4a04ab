"""
SurfSpots Backend — Service Input Parameters
==============================================

What:  Request-scoped inputs shared by the surfer and management services.
How:   Each parameter object exposes ``sanitized()`` (returns a trimmed /
       clamped copy, never mutates) and ``validate()`` (registers every rule
       on one Validator and raises a single ValidationError).
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from surfspots import paging
from surfspots.exceptions import Violation
from surfspots.geo.types import Bounds, Coordinates, Location
from surfspots.surf import SpotCreationEntry, SpotSearchQuery, SpotsParams, SpotUpdateEntry
from surfspots.validation import Validator
from surfspots.validation import conditions as c

MAX_SEARCH_QUERY_CHARS = 100


def normalize_country_code(code: str) -> str:
    return code.strip().lower()


@dataclass(frozen=True)
class SpotsQuery:
    limit: int = paging.DEFAULT_LIMIT
    offset: int = paging.MIN_OFFSET
    country_code: str = ""
    search_query: str = ""
    bounds: Optional[Bounds] = None

    def sanitized(self) -> "SpotsQuery":
        return replace(
            self,
            limit=paging.clamp_limit(self.limit),
            offset=paging.clamp_offset(self.offset),
            country_code=normalize_country_code(self.country_code),
            search_query=self.search_query.strip(),
        )

    def validate(self) -> None:
        v = Validator()
        v.if_false(
            c.string_max_length(self.search_query, MAX_SEARCH_QUERY_CHARS),
            Violation.INVALID_SEARCH_QUERY,
        )
        if self.country_code:
            v.if_false(c.is_country(self.country_code), Violation.INVALID_COUNTRY_CODE)
        if self.bounds is not None:
            ne = self.bounds.north_east
            sw = self.bounds.south_west
            v.if_false(c.is_latitude(ne.latitude), Violation.INVALID_NORTH_EAST_LATITUDE)
            v.if_false(c.is_longitude(ne.longitude), Violation.INVALID_NORTH_EAST_LONGITUDE)
            v.if_false(c.is_latitude(sw.latitude), Violation.INVALID_SOUTH_WEST_LATITUDE)
            v.if_false(c.is_longitude(sw.longitude), Violation.INVALID_SOUTH_WEST_LONGITUDE)
        v.validate()

    def to_store_params(self, with_spot_id: bool) -> SpotsParams:
        search = SpotSearchQuery()
        if self.search_query:
            search = SpotSearchQuery(query=self.search_query, with_spot_id=with_spot_id)
        return SpotsParams(
            limit=self.limit,
            offset=self.offset,
            country_code=self.country_code,
            search_query=search,
            bounds=self.bounds,
        )


@dataclass(frozen=True)
class CreateSpotParams:
    name: str
    latitude: float
    longitude: float
    locality: str
    country_code: str

    def sanitized(self) -> "CreateSpotParams":
        return replace(
            self,
            name=self.name.strip(),
            locality=self.locality.strip(),
            country_code=normalize_country_code(self.country_code),
        )

    def validate(self, context: Optional[Dict[str, Any]] = None) -> None:
        v = Validator()
        v.if_false(c.string_not_empty(self.name), Violation.INVALID_SPOT_NAME)
        v.if_false(c.is_country(self.country_code), Violation.INVALID_COUNTRY_CODE)
        v.if_false(c.string_not_empty(self.locality), Violation.INVALID_LOCALITY)
        v.if_false(c.is_latitude(self.latitude), Violation.INVALID_LATITUDE)
        v.if_false(c.is_longitude(self.longitude), Violation.INVALID_LONGITUDE)
        v.validate(context=context)

    def to_entry(self) -> SpotCreationEntry:
        return SpotCreationEntry(
            name=self.name,
            location=Location(
                locality=self.locality,
                country_code=self.country_code,
                coordinates=Coordinates(latitude=self.latitude, longitude=self.longitude),
            ),
        )


@dataclass(frozen=True)
class UpdateSpotParams:
    """Only fields that are not None are validated and written."""

    id: str
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    locality: Optional[str] = None
    country_code: Optional[str] = None

    def sanitized(self) -> "UpdateSpotParams":
        return replace(
            self,
            id=self.id.strip(),
            name=self.name.strip() if self.name is not None else None,
            locality=self.locality.strip() if self.locality is not None else None,
            country_code=(
                normalize_country_code(self.country_code)
                if self.country_code is not None
                else None
            ),
        )

    def validate(self) -> None:
        v = Validator()
        v.if_false(c.string_not_empty(self.id), Violation.INVALID_SPOT_ID)
        if self.name is not None:
            v.if_false(c.string_not_empty(self.name), Violation.INVALID_SPOT_NAME)
        if self.latitude is not None:
            v.if_false(c.is_latitude(self.latitude), Violation.INVALID_LATITUDE)
        if self.longitude is not None:
            v.if_false(c.is_longitude(self.longitude), Violation.INVALID_LONGITUDE)
        if self.locality is not None:
            v.if_false(c.string_not_empty(self.locality), Violation.INVALID_LOCALITY)
        if self.country_code is not None:
            v.if_false(c.is_country(self.country_code), Violation.INVALID_COUNTRY_CODE)
        v.validate()

    def to_entry(self) -> SpotUpdateEntry:
        return SpotUpdateEntry(
            id=self.id,
            name=self.name,
            latitude=self.latitude,
            longitude=self.longitude,
            locality=self.locality,
            country_code=self.country_code,
        )
