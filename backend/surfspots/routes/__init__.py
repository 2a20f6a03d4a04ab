# Routes package init
"""
SurfSpots Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - surfer.py:      GET    /spots, /spots/{id}          (public)
    - management.py:  GET    /management/spots             (admin)
                      POST   /management/spots
                      GET    /management/spots/{id}
                      PATCH  /management/spots/{id}
                      DELETE /management/spots/{id}
                      GET    /management/geo/location
    - auth.py:        POST   /auth/token
    - health.py:      GET    /health

Routes are THIN: they extract request data, call a service and shape the
response. Sanitizing and validation live in the services.
"""
