"""
SurfSpots Backend — Auth Schemas
==================================
"""

from pydantic import BaseModel, Field


class TokenRequest(BaseModel):
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    access_token: str = Field(description="Signed JWT to send as 'Authorization: Bearer <token>'")
    token_type: str = Field(default="bearer")
