"""
SurfSpots Backend — Persistence Adapters
==========================================

What:  PostgreSQL implementations of the store contracts.

Store Inventory:
    - SqlSpotStore: spot lookup, search, CRUD and batched bulk insert
    - SqlUserStore: operator lookup by e-mail and creation
"""
