# Services package init
"""
SurfSpots Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and stores (persistence).
How:   Services sanitize raw input, validate it with the aggregating validator,
       call their collaborators and translate collaborator errors into the
       application's exception hierarchy. They are injected into routes via
       FastAPI's dependency injection.

Service Inventory:
    - SurferService: public spot lookup and search
    - ManagementService: spot CRUD and reverse geocoding for admins
    - ImportingService: all-or-nothing CSV import
    - AuthService / UserService: access tokens and operator accounts
"""
