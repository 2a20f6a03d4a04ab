"""
SurfSpots Backend — Application Package Initializer
=====================================================

What: The `surfspots` package: a surf spot directory served over HTTP.
Who:  Imported by uvicorn (surfspots.main:app), Alembic, pytest and the
      surfspots-cli entry point.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Sanitize, Validate)     │  ← Surfer, Management, Importing, Auth
    ├─────────────────────────────────────┤
    │   Domain (surf, geo, validation)    │  ← Spot types, SpotStore contract
    ├─────────────────────────────────────┤
    │  Stores & Models (Persistence)      │  ← Async SQLAlchemy on PostgreSQL
    └─────────────────────────────────────┘

    Services depend on the SpotStore and LocationSource contracts, never on
    SQLAlchemy or httpx directly.
"""

__version__ = "1.0.0"
