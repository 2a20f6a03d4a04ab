"""
SurfSpots Backend — Geo Value Types
=====================================

What:  Coordinates, Bounds and Location value objects.
How:   Frozen dataclasses. Range checks are the module-level ``is_latitude`` /
       ``is_longitude`` predicates; nothing raises in ``__post_init__`` so
       services can collect every out-of-range value into one validation result.
"""

from dataclasses import dataclass

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


def is_latitude(value: float) -> bool:
    return MIN_LATITUDE <= value <= MAX_LATITUDE


def is_longitude(value: float) -> bool:
    return MIN_LONGITUDE <= value <= MAX_LONGITUDE


@dataclass(frozen=True)
class Coordinates:
    """A point on the globe, in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Bounds:
    """
    A rectangular search area given by its north-east and south-west corners.

    Used only as a search filter; never persisted.
    """

    north_east: Coordinates
    south_west: Coordinates


@dataclass(frozen=True)
class Location:
    """Where a spot is: a locality name, an ISO-2 country code and coordinates."""

    locality: str
    country_code: str
    coordinates: Coordinates
