"""
SurfSpots Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions raised by services and stores.
How:   Every exception carries a human-readable message, an optional context
       dict for logging, and a class-level ``kind`` so the HTTP layer can map
       it to a status code without inspecting concrete types.
Who:   Raised by services, stores and route dependencies; caught by the
       global handlers registered in main.py.

Exception Hierarchy:
    SurfSpotsError (base)
    ├── ValidationError       → 400 Bad Request (one entry per violated rule)
    ├── EmptyUpdateError      → 400 Bad Request (valid but nothing to change)
    ├── AuthenticationError   → 401 Unauthorized
    ├── AuthorizationError    → 403 Forbidden
    ├── NotFoundError         → 404 Not Found
    ├── ConflictError         → 409 Conflict
    ├── LocationSourceError   → 502 Bad Gateway (geocoding provider failed)
    └── DatabaseError         → 500 Internal Server Error
"""

import enum
from typing import Any, Dict, List, Optional, Sequence


class ErrorKind(str, enum.Enum):
    """Machine-readable error category, also used as the ``error`` field in responses."""

    VALIDATION = "validation_error"
    EMPTY_UPDATE = "empty_update"
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    LOCATION_SOURCE = "location_source_error"
    DATABASE = "server_error"


class Violation(enum.Enum):
    """
    A single violated field-level rule.

    Each member carries the request field it refers to and the description
    returned to clients. Services register these with the validator; the
    HTTP layer renders them as ``{"field": ..., "description": ...}``.
    """

    INVALID_SPOT_ID = ("spot_id", "Must be a non empty string.")
    INVALID_SPOT_NAME = ("name", "Must be a non empty string.")
    INVALID_SEARCH_QUERY = ("query", "Must not exceed character limit.")
    INVALID_COUNTRY_CODE = ("country_code", "Must be a valid ISO-2 country code.")
    INVALID_LOCALITY = ("locality", "Must be a non empty string.")
    INVALID_LATITUDE = ("latitude", "Must be a valid latitude.")
    INVALID_LONGITUDE = ("longitude", "Must be a valid longitude.")
    INVALID_NORTH_EAST_LATITUDE = ("ne_lat", "Must be a valid latitude.")
    INVALID_NORTH_EAST_LONGITUDE = ("ne_lon", "Must be a valid longitude.")
    INVALID_SOUTH_WEST_LATITUDE = ("sw_lat", "Must be a valid latitude.")
    INVALID_SOUTH_WEST_LONGITUDE = ("sw_lon", "Must be a valid longitude.")
    INVALID_EMAIL = ("email", "Must be a valid e-mail address.")
    INVALID_PASSWORD = ("password", "Must contain between 8 and 50 characters.")
    INVALID_ROLE = ("role", "Must be a known role.")

    def __init__(self, field: str, description: str):
        self.field = field
        self.description = description

    def __str__(self) -> str:
        return f"invalid {self.field.replace('_', ' ')}"


class SurfSpotsError(Exception):
    """
    Base exception for all SurfSpots application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.DATABASE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SurfSpotsError):
    """
    Raised when one or more input rules fail.

    Holds every failed rule in the order the rules were registered, never
    just the first one, so a client can fix all fields in one round trip.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        errors: Sequence[Violation],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors: List[Violation] = list(errors)
        if len(self.errors) == 1:
            message = "1 rule failed validation"
        else:
            message = f"{len(self.errors)} rules failed validation"
        super().__init__(message=message, context=context)


class EmptyUpdateError(SurfSpotsError):
    """Raised when an update request carries no field to change."""

    kind = ErrorKind.EMPTY_UPDATE

    def __init__(
        self,
        message: str = "Nothing to update.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SurfSpotsError):
    """
    Raised when a requested resource does not exist.

    Stores and collaborators signal absence with their own errors; each
    service converts those into this exception at its boundary.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class AuthenticationError(SurfSpotsError):
    """Raised for missing, malformed or expired credentials."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(
        self,
        message: str = "Invalid credentials.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(SurfSpotsError):
    """Raised when an authenticated caller lacks the required role."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "You are not allowed to perform this action.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(SurfSpotsError):
    """Raised when a write collides with existing data (e.g. taken e-mail)."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "The resource already exists.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LocationSourceError(SurfSpotsError):
    """
    Raised when the reverse-geocoding provider fails.

    Covers transport failures after retries and non-200 responses. A
    well-formed "no location here" answer is NOT this error; it becomes
    NotFoundError in the management service.
    """

    kind = ErrorKind.LOCATION_SOURCE

    def __init__(
        self,
        message: str = "Location provider is temporarily unavailable.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(SurfSpotsError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the SQL error is
    logged server-side only.
    """

    kind = ErrorKind.DATABASE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
