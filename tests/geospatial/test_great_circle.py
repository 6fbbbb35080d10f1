"""Unit tests for great-circle geometry on the navigation sphere."""

import numpy as np
import pytest

from common.exceptions import DomainInputError
from common.types import GeographicPoint
from common.units import Q_
from geospatial.great_circle import (
    distance_to_arc,
    is_between,
    spherical_azimuth,
    spherical_distance,
    spherical_projection,
)

# One degree of arc on the navigation sphere: 60 nautical miles
ONE_DEGREE_M = 111_120.0


class TestSphericalDistance:
    """Test suite for great-circle distance."""

    def test_one_degree_along_equator(self):
        """Test that one degree is sixty nautical miles."""
        distance = spherical_distance(GeographicPoint(0.0, 0.0), GeographicPoint(0.0, 1.0))
        assert distance == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_symmetric(self):
        """Test that distance does not depend on direction."""
        p1 = GeographicPoint(51.4778, -0.0014)
        p2 = GeographicPoint(40.6413, -73.7781)
        assert spherical_distance(p1, p2) == pytest.approx(spherical_distance(p2, p1))

    def test_coincident_points(self):
        """Test that a point is at zero distance from itself."""
        point = GeographicPoint(-12.0, 33.0)
        assert spherical_distance(point, point) == 0.0

    def test_small_distance_fallback(self):
        """Test the flat-Earth estimate below one centimeter."""
        distance = spherical_distance(GeographicPoint(0.0, 0.0), GeographicPoint(0.0, 1e-9))
        assert distance == pytest.approx(ONE_DEGREE_M * 1e-9, rel=1e-6)

    def test_small_distance_across_antimeridian(self):
        """Test that the fallback wraps the longitude difference."""
        distance = spherical_distance(
            GeographicPoint(0.0, 179.9999999999),
            GeographicPoint(0.0, -179.9999999999),
        )
        assert distance == pytest.approx(ONE_DEGREE_M * 2e-10, rel=1e-2)

    def test_antipodal(self):
        """Test half the circumference between antipodes."""
        distance = spherical_distance(GeographicPoint(0.0, 0.0), GeographicPoint(0.0, 180.0))
        assert distance == pytest.approx(180 * ONE_DEGREE_M, rel=1e-9)


class TestSphericalAzimuth:
    """Test suite for initial great-circle bearing."""

    @pytest.mark.parametrize("destination,expected", [
        ((1.0, 0.0), 0.0),
        ((0.0, 1.0), 90.0),
        ((-1.0, 0.0), 180.0),
        ((0.0, -1.0), 270.0),
    ])
    def test_cardinal_directions(self, destination, expected):
        """Test bearings to the four cardinal neighbours."""
        azimuth = spherical_azimuth(GeographicPoint(0.0, 0.0), GeographicPoint(*destination))
        assert azimuth == pytest.approx(expected, abs=1e-9)

    def test_across_antimeridian(self):
        """Test that a short eastward hop over 180° bears east."""
        azimuth = spherical_azimuth(GeographicPoint(0.0, 179.5), GeographicPoint(0.0, -179.5))
        assert azimuth == pytest.approx(90.0, abs=1e-9)


class TestSphericalProjection:
    """Test suite for travelling along a great circle."""

    def test_due_north(self):
        """Test one degree of travel due north."""
        end = spherical_projection(GeographicPoint(0.0, 0.0), 0.0, ONE_DEGREE_M)
        assert end.latitude == pytest.approx(1.0, abs=1e-9)
        assert end.longitude == pytest.approx(0.0, abs=1e-9)

    def test_due_east_across_antimeridian(self):
        """Test that the destination longitude is normalized."""
        end = spherical_projection(GeographicPoint(0.0, 179.5), 90.0, ONE_DEGREE_M)
        assert end.latitude == pytest.approx(0.0, abs=1e-9)
        assert end.longitude == pytest.approx(-179.5, abs=1e-9)

    def test_accepts_quantities(self):
        """Test that pint quantities give the same result as floats."""
        origin = GeographicPoint(48.0, 11.0)
        from_floats = spherical_projection(origin, 45.0, ONE_DEGREE_M)
        from_quantities = spherical_projection(origin, Q_(np.pi / 4, "radian"), Q_(60, "nautical_mile"))
        assert from_quantities.latitude == pytest.approx(from_floats.latitude, abs=1e-12)
        assert from_quantities.longitude == pytest.approx(from_floats.longitude, abs=1e-12)

    def test_consistent_with_distance_and_azimuth(self):
        """Test that projecting then measuring recovers the inputs."""
        origin = GeographicPoint(-20.0, 30.0)
        end = spherical_projection(origin, 135.0, 750_000.0)
        assert spherical_distance(origin, end) == pytest.approx(750_000.0, abs=1e-3)
        assert spherical_azimuth(origin, end) == pytest.approx(135.0, abs=1e-9)

    @pytest.mark.parametrize("azimuth,distance", [
        (float("nan"), ONE_DEGREE_M),
        (45.0, float("inf")),
        (float("inf"), 1000.0),
    ])
    def test_non_finite_inputs_raise(self, azimuth, distance):
        """Test that a NaN or infinite azimuth or distance is refused."""
        with pytest.raises(DomainInputError):
            spherical_projection(GeographicPoint(0.0, 0.0), azimuth, distance)


class TestCrossTrack:
    """Test suite for betweenness and cross-track distance."""

    P1 = GeographicPoint(0.0, 0.0)
    P2 = GeographicPoint(0.0, 10.0)

    @pytest.mark.parametrize("point,expected", [
        ((0.0, 5.0), True),
        ((1.0, 5.0), True),
        ((0.0, 0.0), True),
        ((0.0, 10.0), False),
        ((0.0, 15.0), False),
        ((0.0, -1.0), False),
    ])
    def test_is_between(self, point, expected):
        """Test the projection parameter range [0, 1)."""
        assert is_between(GeographicPoint(*point), self.P1, self.P2) is expected

    def test_is_between_coincident_endpoints(self):
        """Test that a degenerate segment contains nothing."""
        assert is_between(self.P1, self.P1, self.P1) is False

    def test_distance_positive_between_endpoints(self):
        """Test cross-track distance for a point beside the segment."""
        distance = distance_to_arc(GeographicPoint(1.0, 5.0), self.P1, self.P2)
        assert distance == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_distance_same_magnitude_on_either_side(self):
        """Test that the magnitude does not depend on the side."""
        distance = distance_to_arc(GeographicPoint(-1.0, 5.0), self.P1, self.P2)
        assert distance == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_distance_negative_beyond_endpoints(self):
        """Test that points past the segment get a negative distance."""
        distance = distance_to_arc(GeographicPoint(1.0, 20.0), self.P1, self.P2)
        assert distance == pytest.approx(-ONE_DEGREE_M, rel=1e-9)

    def test_point_on_great_circle(self):
        """Test zero distance for a point on the arc."""
        distance = distance_to_arc(GeographicPoint(0.0, 3.0), self.P1, self.P2)
        assert distance == pytest.approx(0.0, abs=1e-6)

    def test_degenerate_arc_raises(self):
        """Test that coincident arc endpoints raise."""
        with pytest.raises(DomainInputError):
            distance_to_arc(GeographicPoint(1.0, 1.0), self.P1, self.P1)

    @pytest.mark.parametrize("p1,p2", [
        ((90.0, 0.0), (90.0, 45.0)),
        ((0.0, 0.0), (0.0, 180.0)),
        ((-30.0, 20.0), (30.0, -160.0)),
    ])
    def test_pole_and_antipodal_arcs_raise(self, p1, p2):
        """Test that two spellings of a pole and antipodal endpoints raise."""
        with pytest.raises(DomainInputError):
            distance_to_arc(GeographicPoint(10.0, 10.0), GeographicPoint(*p1), GeographicPoint(*p2))
