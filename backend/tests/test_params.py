"""
SurfSpots Backend — Service Parameter Tests
=============================================

What we test:
    ✅ Sanitizing trims text and normalizes country codes
    ✅ Sanitizing an already sanitized value changes nothing
    ✅ sanitized() returns a copy and leaves the original untouched
"""

from surfspots.services.params import CreateSpotParams, SpotsQuery, UpdateSpotParams


class TestCreateSpotParams:
    def test_sanitized(self):
        params = CreateSpotParams(
            name="  Supertubos ",
            latitude=39.3558,
            longitude=-9.3811,
            locality=" Peniche  ",
            country_code=" PT ",
        )

        sanitized = params.sanitized()

        assert sanitized == CreateSpotParams(
            name="Supertubos",
            latitude=39.3558,
            longitude=-9.3811,
            locality="Peniche",
            country_code="pt",
        )
        assert params.name == "  Supertubos "

    def test_sanitizing_twice_is_a_no_op(self):
        params = CreateSpotParams(
            name="\tRibeira d'Ilhas ",
            latitude=38.9887,
            longitude=-9.4195,
            locality=" Ericeira",
            country_code="Pt ",
        )

        assert params.sanitized().sanitized() == params.sanitized()


class TestUpdateSpotParams:
    def test_absent_fields_stay_absent(self):
        sanitized = UpdateSpotParams(id=" abc ", name=" Supertubos ").sanitized()

        assert sanitized == UpdateSpotParams(id="abc", name="Supertubos")

    def test_sanitizing_twice_is_a_no_op(self):
        params = UpdateSpotParams(id=" abc", locality=" Peniche ", country_code=" PT")

        assert params.sanitized().sanitized() == params.sanitized()


class TestSpotsQuery:
    def test_sanitizing_twice_is_a_no_op(self):
        query = SpotsQuery(limit=500, offset=-3, country_code=" PT ", search_query="  tubos ")

        assert query.sanitized().sanitized() == query.sanitized()
