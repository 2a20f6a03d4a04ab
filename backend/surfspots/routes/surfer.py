"""
SurfSpots Backend — Public Spot Routes
========================================

What:  GET /spots (search) and GET /spots/{spot_id} (detail) for anyone.
How:   Extracts query parameters, delegates to SurferService, returns JSON.
"""

from fastapi import APIRouter, Depends

from surfspots.routes.dependencies import get_spots_query, get_surfer_service
from surfspots.schemas.common import ErrorResponse
from surfspots.schemas.spot import SpotResponse, SpotsResponse
from surfspots.services.params import SpotsQuery
from surfspots.services.surfer_service import SurferService

router = APIRouter(prefix="/spots", tags=["Spots"])


@router.get(
    "",
    response_model=SpotsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Search surf spots",
    description=(
        "Returns one page of spots, optionally filtered by country, free text "
        "over names and localities, and a bounding box given by its north-east "
        "and south-west corners."
    ),
)
async def list_spots(
    query: SpotsQuery = Depends(get_spots_query),
    service: SurferService = Depends(get_surfer_service),
) -> SpotsResponse:
    spots = await service.spots(query)
    return SpotsResponse.from_spots(spots)


@router.get(
    "/{spot_id}",
    response_model=SpotResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a single spot by ID",
)
async def get_spot(
    spot_id: str,
    service: SurferService = Depends(get_surfer_service),
) -> SpotResponse:
    spot = await service.spot(spot_id)
    return SpotResponse.from_spot(spot)
