"""
SurfSpots Backend — Management Routes
=======================================

What:  Spot CRUD and reverse geocoding under /management, admin only.
How:   The router-level require_admin dependency runs before every handler
       (401 without a valid token, 403 without the admin role). Handlers
       map request bodies onto service parameters and nothing more.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from surfspots.geo.types import Coordinates
from surfspots.routes.dependencies import (
    get_management_service,
    get_spots_query,
    require_admin,
)
from surfspots.schemas.common import ErrorResponse
from surfspots.schemas.spot import (
    CreateSpotRequest,
    LocationResponse,
    SpotResponse,
    SpotsResponse,
    UpdateSpotRequest,
)
from surfspots.services.management_service import ManagementService
from surfspots.services.params import CreateSpotParams, SpotsQuery, UpdateSpotParams

router = APIRouter(
    prefix="/management",
    tags=["Management"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)


@router.get("/spots", response_model=SpotsResponse, summary="Search spots, including by ID")
async def list_spots(
    query: SpotsQuery = Depends(get_spots_query),
    service: ManagementService = Depends(get_management_service),
) -> SpotsResponse:
    spots = await service.spots(query)
    return SpotsResponse.from_spots(spots)


@router.post(
    "/spots",
    response_model=SpotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create a spot",
)
async def create_spot(
    body: CreateSpotRequest,
    service: ManagementService = Depends(get_management_service),
) -> SpotResponse:
    spot = await service.create_spot(
        CreateSpotParams(
            name=body.name,
            latitude=body.latitude,
            longitude=body.longitude,
            locality=body.locality,
            country_code=body.country_code,
        )
    )
    return SpotResponse.from_spot(spot)


@router.get(
    "/spots/{spot_id}",
    response_model=SpotResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a spot by ID",
)
async def get_spot(
    spot_id: str,
    service: ManagementService = Depends(get_management_service),
) -> SpotResponse:
    spot = await service.spot(spot_id)
    return SpotResponse.from_spot(spot)


@router.patch(
    "/spots/{spot_id}",
    response_model=SpotResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Partially update a spot",
)
async def update_spot(
    spot_id: str,
    body: UpdateSpotRequest,
    service: ManagementService = Depends(get_management_service),
) -> SpotResponse:
    spot = await service.update_spot(
        UpdateSpotParams(
            id=spot_id,
            name=body.name,
            latitude=body.latitude,
            longitude=body.longitude,
            locality=body.locality,
            country_code=body.country_code,
        )
    )
    return SpotResponse.from_spot(spot)


@router.delete(
    "/spots/{spot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a spot",
)
async def delete_spot(
    spot_id: str,
    service: ManagementService = Depends(get_management_service),
) -> Response:
    await service.delete_spot(spot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/geo/location",
    response_model=LocationResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Reverse-geocode coordinates",
)
async def get_location(
    latitude: float = Query(description="Latitude in decimal degrees"),
    longitude: float = Query(description="Longitude in decimal degrees"),
    service: ManagementService = Depends(get_management_service),
) -> LocationResponse:
    location = await service.location(Coordinates(latitude=latitude, longitude=longitude))
    return LocationResponse.from_location(location)
