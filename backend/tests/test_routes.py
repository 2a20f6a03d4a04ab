"""
SurfSpots Backend — HTTP Route Tests
======================================

What:  End-to-end request handling through the FastAPI app.
How:   httpx.AsyncClient over ASGITransport; service providers are replaced
       with real services around mocked stores via dependency_overrides, so
       validation and error mapping run for real without a database.

What we test:
    ✅ Public search and detail, including per-field validation errors
    ✅ Management routes require a valid admin token (401 / 403)
    ✅ Management CRUD and reverse geocoding status codes
    ✅ Token issuance
    ✅ Health check reports database reachability
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from surfspots.config import settings
from surfspots.exceptions import LocationSourceError
from surfspots.geo.source import LocationNotFoundError
from surfspots.main import app
from surfspots.routes.dependencies import (
    get_auth_service,
    get_management_service,
    get_surfer_service,
)
from surfspots.security import Role, create_access_token, hash_password
from surfspots.services.auth_service import AuthService
from surfspots.services.management_service import ManagementService
from surfspots.services.surfer_service import SurferService
from surfspots.stores.user_store import User, UserNotFoundError
from surfspots.surf import EmptySpotUpdateError, SpotNotFoundError


@pytest.fixture
def user_store():
    store = AsyncMock()
    store.user_by_email = AsyncMock()
    return store


@pytest_asyncio.fixture
async def client(spot_store, location_source, user_store):
    app.dependency_overrides[get_surfer_service] = lambda: SurferService(spot_store)
    app.dependency_overrides[get_management_service] = lambda: ManagementService(
        spot_store, location_source
    )
    app.dependency_overrides[get_auth_service] = lambda: AuthService(user_store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token("user-1", "admin@surfspots.io", Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}


def token_with_role(role, secret=None):
    now = datetime.now(timezone.utc)
    claims = {
        "sub": "user-2",
        "email": "surfer@surfspots.io",
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=5)).timestamp()),
    }
    key = settings.jwt_secret if secret is None else secret
    return jwt.encode(claims, key, algorithm=settings.jwt_algorithm)


class TestPublicSpots:
    @pytest.mark.asyncio
    async def test_list(self, client, spot_store, sample_spot):
        spot_store.spots.return_value = [sample_spot]

        response = await client.get("/spots", params={"country_code": "PT", "limit": 5})

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["id"] == sample_spot.id
        assert item["name"] == "Supertubos"
        assert item["location"]["country_code"] == "pt"
        assert item["location"]["latitude"] == 39.3558
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_empty_page(self, client, spot_store):
        spot_store.spots.return_value = []

        response = await client.get("/spots")

        assert response.status_code == 200
        assert response.json() == {"items": []}

    @pytest.mark.asyncio
    async def test_partial_bounds_report_missing_corners(self, client, spot_store):
        response = await client.get("/spots", params={"ne_lat": 40.0, "ne_lon": -8.0})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert [f["field"] for f in body["fields"]] == ["sw_lat", "sw_lon"]
        spot_store.spots.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_query_parameter(self, client):
        response = await client.get("/spots", params={"limit": "many"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["fields"][0]["field"] == "limit"

    @pytest.mark.asyncio
    async def test_detail(self, client, spot_store, sample_spot):
        spot_store.spot.return_value = sample_spot

        response = await client.get(f"/spots/{sample_spot.id}")

        assert response.status_code == 200
        assert response.json()["location"]["locality"] == "Peniche"

    @pytest.mark.asyncio
    async def test_detail_not_found(self, client, spot_store):
        spot_store.spot.side_effect = SpotNotFoundError("missing")

        response = await client.get("/spots/missing", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert response.json()["request_id"] == "req-42"


class TestManagementAccess:
    @pytest.mark.asyncio
    async def test_missing_token(self, client, spot_store):
        response = await client.get("/management/spots")

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"
        spot_store.spots.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.get(
            "/management/spots", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_admin_role(self, client, spot_store):
        headers = {"Authorization": f"Bearer {token_with_role('surfer')}"}

        response = await client.get("/management/spots", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "unauthorized"
        spot_store.spots.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfigured_secret_rejects_tokens_signed_with_empty_key(
        self, client, spot_store, monkeypatch
    ):
        monkeypatch.setattr(settings, "jwt_secret", "")
        headers = {"Authorization": f"Bearer {token_with_role('admin', secret='')}"}

        response = await client.get("/management/spots", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"
        spot_store.spots.assert_not_awaited()


class TestManagementSpots:
    @pytest.mark.asyncio
    async def test_search_includes_ids(self, client, spot_store, admin_headers):
        spot_store.spots.return_value = []

        response = await client.get(
            "/management/spots", params={"query": "4f1c"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert spot_store.spots.await_args.args[0].search_query.with_spot_id

    @pytest.mark.asyncio
    async def test_create(self, client, spot_store, admin_headers, sample_spot):
        spot_store.create_spot.return_value = sample_spot

        response = await client.post(
            "/management/spots",
            json={
                "name": "Supertubos",
                "latitude": 39.3558,
                "longitude": -9.3811,
                "locality": "Peniche",
                "country_code": "pt",
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["id"] == sample_spot.id

    @pytest.mark.asyncio
    async def test_create_reports_every_invalid_field(self, client, spot_store, admin_headers):
        response = await client.post(
            "/management/spots",
            json={"name": "", "latitude": 100.0, "longitude": 0.0},
            headers=admin_headers,
        )

        assert response.status_code == 400
        fields = [f["field"] for f in response.json()["fields"]]
        assert fields == ["name", "country_code", "locality", "latitude"]
        spot_store.create_spot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update(self, client, spot_store, admin_headers, sample_spot):
        spot_store.update_spot.return_value = sample_spot

        response = await client.patch(
            f"/management/spots/{sample_spot.id}",
            json={"name": "Supertubos"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        entry = spot_store.update_spot.await_args.args[0]
        assert entry.name == "Supertubos"
        assert entry.locality is None

    @pytest.mark.asyncio
    async def test_empty_update(self, client, spot_store, admin_headers):
        spot_store.update_spot.side_effect = EmptySpotUpdateError("abc")

        response = await client.patch("/management/spots/abc", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "empty_update"

    @pytest.mark.asyncio
    async def test_delete(self, client, spot_store, admin_headers):
        response = await client.delete("/management/spots/abc", headers=admin_headers)

        assert response.status_code == 204
        spot_store.delete_spot.assert_awaited_once_with("abc")

    @pytest.mark.asyncio
    async def test_delete_missing(self, client, spot_store, admin_headers):
        spot_store.delete_spot.side_effect = SpotNotFoundError("abc")

        response = await client.delete("/management/spots/abc", headers=admin_headers)

        assert response.status_code == 404


class TestManagementLocation:
    @pytest.mark.asyncio
    async def test_location(self, client, location_source, admin_headers, sample_location):
        location_source.location.return_value = sample_location

        response = await client.get(
            "/management/geo/location",
            params={"latitude": 39.3558, "longitude": -9.3811},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "locality": "Peniche",
            "country_code": "pt",
            "latitude": 39.3558,
            "longitude": -9.3811,
        }

    @pytest.mark.asyncio
    async def test_out_of_range(self, client, location_source, admin_headers):
        response = await client.get(
            "/management/geo/location",
            params={"latitude": 91, "longitude": 0},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["fields"] == [
            {"field": "latitude", "description": "Must be a valid latitude."}
        ]
        location_source.location.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_location_found(self, client, location_source, admin_headers):
        location_source.location.side_effect = LocationNotFoundError("Unable to geocode")

        response = await client.get(
            "/management/geo/location",
            params={"latitude": 0, "longitude": -30},
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_provider_down(self, client, location_source, admin_headers):
        location_source.location.side_effect = LocationSourceError()

        response = await client.get(
            "/management/geo/location",
            params={"latitude": 0, "longitude": 0},
            headers=admin_headers,
        )

        assert response.status_code == 502
        assert response.json()["error"] == "location_source_error"


class TestAuthToken:
    @pytest.mark.asyncio
    async def test_issues_token(self, client, user_store, spot_store):
        spot_store.spot.side_effect = SpotNotFoundError("abc")
        user_store.user_by_email.return_value = User(
            id="user-1",
            email="admin@surfspots.io",
            role=Role.ADMIN,
            password_hash=hash_password("correct-horse-battery"),
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        response = await client.post(
            "/auth/token",
            json={"email": "admin@surfspots.io", "password": "correct-horse-battery"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"

        managed = await client.get(
            "/management/spots/abc",
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )
        assert managed.status_code == 404

    @pytest.mark.asyncio
    async def test_rejects_unknown_user(self, client, user_store):
        user_store.user_by_email.side_effect = UserNotFoundError("ghost@surfspots.io")

        response = await client.post(
            "/auth/token",
            json={"email": "ghost@surfspots.io", "password": "whatever-it-is"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials."


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, client):
        engine = MagicMock()
        engine.connect.return_value.__aenter__.return_value = AsyncMock()

        with patch("surfspots.routes.health.engine", engine):
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_unreachable(self, client):
        engine = MagicMock()
        engine.connect.side_effect = OSError("connection refused")

        with patch("surfspots.routes.health.engine", engine):
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
