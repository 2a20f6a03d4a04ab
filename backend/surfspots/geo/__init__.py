"""
SurfSpots Backend — Geo Package
=================================

What:  Geographic value types, the ISO-2 country table, and the reverse
       geocoding contract with its Nominatim implementation.
"""
