"""
SurfSpots Backend — Shared Response Schemas
=============================================

What:  Error and health payloads used by every router.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: str = Field(description="Request field that failed validation")
    description: str = Field(description="What a valid value looks like")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "2 rules failed validation",
            "fields": [
                {"field": "name", "description": "Must be a non empty string."},
                {"field": "latitude", "description": "Must be a valid latitude."}
            ],
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    fields: Optional[List[FieldError]] = Field(
        default=None,
        description="Per-field violations (validation errors only)",
    )
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy | unhealthy")
    version: str
    database: str = Field(description="connected | disconnected")
    uptime_seconds: float
