"""
SurfSpots Backend — Nominatim Location Source Tests
=====================================================

What:  Tests for reverse geocoding over HTTP.
How:   httpx.MockTransport answers requests in-process; retry waits are zero.

What we test:
    ✅ Request shape (endpoint, lat/lon/format params, Accept-Language)
    ✅ Locality and country code extraction
    ✅ "error" body → LocationNotFoundError
    ✅ Non-200 and non-JSON bodies → LocationSourceError
    ✅ Transport failures are retried, then surface as LocationSourceError
    ✅ Backoff is configured without deprecated tenacity arguments
"""

import warnings

import httpx
import pytest

from surfspots.exceptions import LocationSourceError
from surfspots.geo.nominatim import NominatimLocationSource
from surfspots.geo.source import LocationNotFoundError
from surfspots.geo.types import Coordinates

BASE_URL = "https://nominatim.test"
COORDINATES = Coordinates(latitude=39.3558, longitude=-9.3811)


def make_source(handler, max_attempts=3):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NominatimLocationSource(
        client,
        BASE_URL + "/",
        max_attempts=max_attempts,
        min_wait=0,
        max_wait=0,
    )


@pytest.mark.asyncio
async def test_returns_location():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "display_name": "Peniche, Leiria, Portugal",
                "address": {
                    "town": "Peniche",
                    "county": "Peniche",
                    "state": "Leiria",
                    "country_code": "PT",
                },
            },
        )

    location = await make_source(handler).location(COORDINATES)

    assert location.locality == "Peniche"
    assert location.country_code == "pt"
    assert location.coordinates == COORDINATES

    request = seen[0]
    assert request.url.path == "/reverse"
    assert request.url.params["lat"] == "39.3558"
    assert request.url.params["lon"] == "-9.3811"
    assert request.url.params["format"] == "json"
    assert request.headers["Accept-Language"] == "en"


@pytest.mark.asyncio
async def test_error_body_means_no_location():
    def handler(request):
        return httpx.Response(200, json={"error": "Unable to geocode"})

    with pytest.raises(LocationNotFoundError):
        await make_source(handler).location(Coordinates(latitude=0.0, longitude=-30.0))


@pytest.mark.asyncio
async def test_non_200_is_a_provider_failure():
    def handler(request):
        return httpx.Response(503, text="Service Unavailable")

    with pytest.raises(LocationSourceError) as exc_info:
        await make_source(handler).location(COORDINATES)

    assert exc_info.value.context == {"status": 503}


@pytest.mark.asyncio
async def test_non_json_body_is_a_provider_failure():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(LocationSourceError):
        await make_source(handler).location(COORDINATES)


@pytest.mark.asyncio
async def test_transport_errors_are_retried():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LocationSourceError):
        await make_source(handler, max_attempts=3).location(COORDINATES)

    assert len(calls) == 3


@pytest.mark.asyncio
async def test_recovers_after_transient_failure():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json={"address": {"village": "Ericeira", "country_code": "pt"}})

    location = await make_source(handler).location(COORDINATES)

    assert location.locality == "Ericeira"
    assert len(calls) == 2


def test_backoff_scales_from_min_wait_without_deprecations():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: None))

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        source = NominatimLocationSource(client, BASE_URL, min_wait=2, max_wait=10)

    wait = source._get_with_retry.retry.wait
    assert wait.multiplier == 2
    assert wait.max == 10
