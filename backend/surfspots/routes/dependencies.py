"""
SurfSpots Backend — Route Dependencies
========================================

What:  FastAPI providers wiring sessions → stores → services, plus the
       bearer-token guard for management routes.
How:   Every service is built per request around the request's session.
       The location source is process-wide and lives on app.state.
       Tests replace any provider through app.dependency_overrides.
"""

import math
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from surfspots.config import settings
from surfspots.database import get_db_session
from surfspots.exceptions import AuthenticationError, AuthorizationError
from surfspots.geo.source import LocationSource
from surfspots.geo.types import Bounds, Coordinates
from surfspots.security import Role, TokenClaims, decode_access_token
from surfspots.services.auth_service import AuthService
from surfspots.services.management_service import ManagementService
from surfspots.services.params import SpotsQuery
from surfspots.services.surfer_service import SurferService
from surfspots.stores.spot_store import SqlSpotStore
from surfspots.stores.user_store import SqlUserStore
from surfspots.surf import SpotStore

# auto_error=False so a missing header becomes our 401 body, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


# ── Stores & services ─────────────────────────────────────────────────────

def get_spot_store(db: AsyncSession = Depends(get_db_session)) -> SpotStore:
    return SqlSpotStore(db, batch_size=settings.spot_batch_size)


def get_user_store(db: AsyncSession = Depends(get_db_session)) -> SqlUserStore:
    return SqlUserStore(db)


def get_location_source(request: Request) -> LocationSource:
    return request.app.state.location_source


def get_surfer_service(store: SpotStore = Depends(get_spot_store)) -> SurferService:
    return SurferService(store)


def get_management_service(
    store: SpotStore = Depends(get_spot_store),
    location_source: LocationSource = Depends(get_location_source),
) -> ManagementService:
    return ManagementService(store, location_source)


def get_auth_service(store: SqlUserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


# ── Query parameters ──────────────────────────────────────────────────────

def _corner(value: Optional[float]) -> float:
    # A missing corner value fails the range check and is reported per field.
    return math.nan if value is None else value


def get_spots_query(
    limit: int = Query(default=10, description="Page size, clamped to 1..100"),
    offset: int = Query(default=0, description="Items to skip, clamped to >= 0"),
    country_code: str = Query(default="", description="ISO-2 country filter"),
    query: str = Query(default="", description="Free-text search (max 100 chars)"),
    ne_lat: Optional[float] = Query(default=None, description="North-east corner latitude"),
    ne_lon: Optional[float] = Query(default=None, description="North-east corner longitude"),
    sw_lat: Optional[float] = Query(default=None, description="South-west corner latitude"),
    sw_lon: Optional[float] = Query(default=None, description="South-west corner longitude"),
) -> SpotsQuery:
    bounds = None
    corners = (ne_lat, ne_lon, sw_lat, sw_lon)
    if any(value is not None for value in corners):
        bounds = Bounds(
            north_east=Coordinates(latitude=_corner(ne_lat), longitude=_corner(ne_lon)),
            south_west=Coordinates(latitude=_corner(sw_lat), longitude=_corner(sw_lon)),
        )
    return SpotsQuery(
        limit=limit,
        offset=offset,
        country_code=country_code,
        search_query=query,
        bounds=bounds,
    )


# ── Authorization ─────────────────────────────────────────────────────────

def get_token_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    """Raises AuthenticationError (401) for a missing or invalid bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Missing access token.")
    claims = decode_access_token(credentials.credentials)
    request.state.user_id = claims.subject
    return claims


def require_admin(claims: TokenClaims = Depends(get_token_claims)) -> TokenClaims:
    """Raises AuthorizationError (403) unless the token carries the admin role."""
    if not claims.has_role(Role.ADMIN):
        raise AuthorizationError(context={"user_id": claims.subject, "role": claims.role})
    return claims
