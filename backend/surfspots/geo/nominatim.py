"""
SurfSpots Backend — Nominatim Location Source
===============================================

What:  Reverse geocoding against an OpenStreetMap Nominatim server.
How:   GET {base_url}/reverse?lat=..&lon=..&format=json with an English
       Accept-Language header, over a shared httpx.AsyncClient. Transport
       failures are retried with tenacity (exponential backoff plus jitter);
       once retries are exhausted they surface as LocationSourceError.
Who:   Created once in the application lifespan and stored on app.state.

Response handling:
    non-200 status            → LocationSourceError
    body is not a JSON object → LocationSourceError
    body has an "error" field → LocationNotFoundError
    otherwise                 → Location (locality picked from the address)
"""

import logging
from typing import Any, Dict

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from surfspots.exceptions import LocationSourceError
from surfspots.geo.source import LocationNotFoundError, LocationSource
from surfspots.geo.types import Coordinates, Location

logger = logging.getLogger(__name__)

REVERSE_ENDPOINT = "/reverse"

# Most specific first.
LOCALITY_FIELDS = (
    "hamlet",
    "village",
    "town",
    "city",
    "city_district",
    "municipality",
    "county",
    "state",
    "territory",
    "region",
)


def pick_locality(address: Dict[str, Any]) -> str:
    """Return the most specific non-empty place name of a Nominatim address."""
    for field in LOCALITY_FIELDS:
        value = address.get(field)
        if value:
            return str(value)
    return ""


def format_degrees(value: float) -> str:
    # Shortest representation that round-trips: 1.23 stays "1.23".
    return repr(float(value))


class NominatimLocationSource(LocationSource):
    """
    Nominatim-backed LocationSource.

    The client is owned by the caller; this class never closes it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        max_attempts: int = 3,
        min_wait: float = 2,
        max_wait: float = 10,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts

        # tenacity copies its controller per call, so one wrapper serves all requests
        self._get_with_retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential_jitter(multiplier=min_wait, max=max_wait, jitter=1),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )(self._get)

    async def _get(self, params: Dict[str, str]) -> httpx.Response:
        return await self.client.get(
            self.base_url + REVERSE_ENDPOINT,
            params=params,
            headers={"Accept-Language": "en"},
        )

    async def location(self, coordinates: Coordinates) -> Location:
        params = {
            "lat": format_degrees(coordinates.latitude),
            "lon": format_degrees(coordinates.longitude),
            "format": "json",
        }

        try:
            response = await self._get_with_retry(params)
        except httpx.HTTPError as e:
            logger.error(
                "Nominatim request failed after %d attempts: %s",
                self.max_attempts,
                str(e),
            )
            raise LocationSourceError(
                context={"error_type": type(e).__name__, "attempts": self.max_attempts},
            )

        if response.status_code != 200:
            logger.error(
                "Nominatim responded with status %d: %s",
                response.status_code,
                response.text[:200],
            )
            raise LocationSourceError(context={"status": response.status_code})

        try:
            body = response.json()
        except ValueError:
            logger.error("Nominatim returned a non-JSON body: %r", response.text[:200])
            raise LocationSourceError(context={"reason": "invalid_body"})

        if not isinstance(body, dict):
            raise LocationSourceError(context={"reason": "invalid_body"})

        if body.get("error"):
            raise LocationNotFoundError(str(body["error"]))

        address = body.get("address") or {}
        locality = pick_locality(address)
        if not locality:
            logger.warning(
                "Nominatim address without locality at (%s, %s)",
                params["lat"],
                params["lon"],
            )

        return Location(
            locality=locality,
            country_code=str(address.get("country_code", "")).lower(),
            coordinates=coordinates,
        )
