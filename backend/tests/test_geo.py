"""
SurfSpots Backend — Geo Types & Country Table Tests
=====================================================
"""

import pytest

from surfspots.geo.countries import COUNTRIES, is_country
from surfspots.geo.nominatim import format_degrees, pick_locality
from surfspots.geo.types import is_latitude, is_longitude


class TestCoordinateRanges:
    def test_valid(self):
        assert is_latitude(21.665)
        assert is_longitude(-158.053)

    def test_limits_are_inclusive(self):
        assert is_latitude(90.0) and is_latitude(-90.0)
        assert is_longitude(180.0) and is_longitude(-180.0)

    @pytest.mark.parametrize("latitude", [91.0, -91.0])
    def test_latitude_out_of_range(self, latitude):
        assert not is_latitude(latitude)

    @pytest.mark.parametrize("longitude", [181.0, -181.0])
    def test_longitude_out_of_range(self, longitude):
        assert not is_longitude(longitude)


class TestCountries:
    def test_known_codes(self):
        assert is_country("pt")
        assert is_country("us")
        assert "fr" in COUNTRIES

    def test_unknown_or_uppercase_codes(self):
        assert not is_country("PT")
        assert not is_country("xx")
        assert not is_country("prt")

    def test_table_holds_every_assigned_code(self):
        assert len(COUNTRIES) == 249
        assert all(len(code) == 2 and code.islower() for code in COUNTRIES)


class TestLocalityPicking:
    def test_most_specific_field_wins(self):
        address = {"village": "Ericeira", "county": "Mafra", "state": "Lisboa"}
        assert pick_locality(address) == "Ericeira"

    def test_empty_values_are_skipped(self):
        address = {"hamlet": "", "town": "Peniche", "region": "Centro"}
        assert pick_locality(address) == "Peniche"

    def test_no_known_field(self):
        assert pick_locality({"country": "Portugal"}) == ""

    def test_degrees_keep_shortest_representation(self):
        assert format_degrees(39.3558) == "39.3558"
        assert format_degrees(-9) == "-9.0"
