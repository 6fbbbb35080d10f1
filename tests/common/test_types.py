"""Unit tests for coordinate value types."""

import numpy as np
import pytest

from common.exceptions import DomainInputError, InvalidZoneLetterError, GeodesyError
from common.types import GeographicPoint, UTMCoordinate, normalize_longitude


class TestNormalizeLongitude:
    """Test suite for longitude wrapping."""

    @pytest.mark.parametrize("longitude,expected", [
        (45.0, 45.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (181.0, -179.0),
        (-181.0, 179.0),
        (360.0, 0.0),
        (540.0, 180.0),
        (-725.0, -5.0),
    ])
    def test_wraps_into_half_open_interval(self, longitude, expected):
        """Test wrapping into (-180, 180]."""
        assert normalize_longitude(longitude) == pytest.approx(expected, abs=1e-12)

    def test_in_range_value_unchanged(self):
        """Test that in-range values are returned bit-for-bit."""
        assert normalize_longitude(-0.0014) == -0.0014


class TestGeographicPoint:
    """Test suite for GeographicPoint."""

    def test_longitude_is_normalized(self):
        """Test that construction normalizes longitude."""
        assert GeographicPoint(10.0, 190.0).longitude == pytest.approx(-170.0)
        assert GeographicPoint(10.0, -180.0).longitude == 180.0

    @pytest.mark.parametrize("latitude", [90.0001, -91.0, 180.0])
    def test_rejects_out_of_range_latitude(self, latitude):
        """Test that latitudes outside [-90, 90] are rejected, not wrapped."""
        with pytest.raises(DomainInputError):
            GeographicPoint(latitude, 0.0)

    @pytest.mark.parametrize("latitude,longitude", [
        (np.nan, 0.0),
        (0.0, np.inf),
        (-np.inf, 10.0),
    ])
    def test_rejects_non_finite(self, latitude, longitude):
        """Test that NaN and infinite coordinates are rejected."""
        with pytest.raises(DomainInputError):
            GeographicPoint(latitude, longitude)

    def test_poles_accepted(self):
        """Test that the poles are valid points."""
        assert GeographicPoint(90.0, 0.0).latitude == 90.0
        assert GeographicPoint(-90.0, 0.0).latitude == -90.0

    def test_radians_round_trip(self):
        """Test conversion to and from radians."""
        point = GeographicPoint(-33.8568, 151.2153)
        lat_rad, lon_rad = point.to_radians()
        assert lat_rad == pytest.approx(np.radians(-33.8568))

        recovered = GeographicPoint.from_radians(lat_rad, lon_rad)
        assert recovered.latitude == pytest.approx(point.latitude, abs=1e-12)
        assert recovered.longitude == pytest.approx(point.longitude, abs=1e-12)

    def test_is_immutable(self):
        """Test that points cannot be modified after construction."""
        point = GeographicPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0

    def test_error_is_value_error(self):
        """Test that domain errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            GeographicPoint(100.0, 0.0)


class TestUTMCoordinate:
    """Test suite for UTMCoordinate."""

    def test_lowercase_letter_upper_cased(self):
        """Test that lowercase band letters are accepted."""
        utm = UTMCoordinate(31, "n", 500000, 0)
        assert utm.zone_letter == "N"
        assert utm.zone == "31N"
        assert isinstance(utm.easting, float)

    @pytest.mark.parametrize("letter", ["I", "O", "Z", "A", "", "NN", "1"])
    def test_rejects_invalid_letter(self, letter):
        """Test that letters outside the band table are rejected."""
        with pytest.raises(InvalidZoneLetterError) as excinfo:
            UTMCoordinate(31, letter, 500000.0, 0.0)
        assert excinfo.value.zone_letter == letter
        assert isinstance(excinfo.value, GeodesyError)

    @pytest.mark.parametrize("zone", [0, 61, -5])
    def test_rejects_invalid_zone_number(self, zone):
        """Test that zone numbers outside [1, 60] are rejected."""
        with pytest.raises(DomainInputError):
            UTMCoordinate(zone, "N", 500000.0, 0.0)

    @pytest.mark.parametrize("letter,southern", [
        ("C", True),
        ("M", True),
        ("N", False),
        ("X", False),
    ])
    def test_hemisphere_from_letter(self, letter, southern):
        """Test that letters before 'N' are southern."""
        assert UTMCoordinate(33, letter, 400000.0, 5000000.0).is_southern is southern
