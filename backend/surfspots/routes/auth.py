"""
SurfSpots Backend — Auth Routes
=================================

What:  POST /auth/token exchanges e-mail and password for an access token.
"""

from fastapi import APIRouter, Depends

from surfspots.routes.dependencies import get_auth_service
from surfspots.schemas.auth import TokenRequest, TokenResponse
from surfspots.schemas.common import ErrorResponse
from surfspots.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/token",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Issue an access token",
)
async def issue_token(
    body: TokenRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    token = await service.token(body.email, body.password)
    return TokenResponse(access_token=token)
