"""
SurfSpots Backend — Request ID Middleware
===========================================

What:  Assigns a correlation ID to each request and echoes it in the response.
Why:   Ties together the access line, any error logs and the JSON error body
       of one request, so a client can quote a single ID in a bug report.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID; stores it in a ContextVar for loggers and
       exception handlers, and in request.state for route handlers.
Who:   Applied to every request via Starlette middleware.
When:  First middleware in the chain.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ── Context Variable ──────────────────────────────────────────────────────
# What: Coroutine-local storage for the current request ID
# Why ContextVar: concurrent requests share one thread; threading.local
# would leak IDs between them
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID and exposes it to the rest of the request.

    Behavior:
        1. Use the client's X-Request-ID header if it is non-empty
        2. Otherwise generate an 8-character ID
        3. Store it in request_id_var and request.state.request_id
        4. Reset the ContextVar once the handler returns
        5. Add X-Request-ID to the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why short UUID: 8 characters is enough to correlate and easy to read in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        # Why both: ContextVar for loggers and handlers, request.state for routes
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
