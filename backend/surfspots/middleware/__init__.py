# Middleware package init
"""
SurfSpots Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.
Why:   Correlation IDs and access logging are needed on every route; doing
       them here keeps route handlers free of bookkeeping.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Why this order:
    1. Request ID FIRST: every later log line and error body can read the ID
    2. Logging: access line with status and duration, tagged with the ID
    3. GZip / CORS: FastAPI's own middleware, closest to the routes

    The order is reversed for responses:
    Response ← [Request ID] ← [Logging] ← [GZip] ← [CORS] ← Route Handler

    This means:
    - Logging sees the final status code and the full handler duration
    - X-Request-ID is added on the way out, after the handler has run
"""
