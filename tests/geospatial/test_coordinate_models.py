"""Unit tests for ellipsoid models and ECEF/sphere conversions."""

import numpy as np
import pytest

from common.exceptions import DomainInputError, NonConvergenceError
from common.types import GeographicPoint
from geospatial.coordinate_models import (
    NavigationSphere,
    WGS84Ellipsoid,
    ecef_to_geodetic,
    geodetic_to_ecef,
    geodetic_to_sphere,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
    sphere_to_geodetic,
    spherical_cross,
)
from geospatial.vectors import EllipsoidalVector, SphericalVector

ROUND_TRIP_POINTS = [
    (0.0, 0.0),
    (45.0, -120.0),
    (-33.8568, 151.2153),
    (89.9, 10.0),
    (-60.0, 179.9),
    (12.5, -179.5),
]


class TestEllipsoidParameters:
    """Test suite for derived ellipsoid parameters."""

    def test_wgs84_derived_values(self):
        """Test WGS84 semi-minor axis and eccentricity."""
        assert WGS84Ellipsoid.b == pytest.approx(6356752.314245, abs=1e-6)
        assert WGS84Ellipsoid.e2 == pytest.approx(0.00669437999014, rel=1e-10)
        assert WGS84Ellipsoid.f == pytest.approx(1 / 298.257223563)

    def test_radii_of_curvature_at_equator(self):
        """Test M and N at the equator."""
        a = WGS84Ellipsoid.a
        assert radius_of_curvature_prime_vertical(0.0) == pytest.approx(a)
        assert radius_of_curvature_meridian(0.0) == pytest.approx(a * (1 - WGS84Ellipsoid.e2))

    def test_radii_of_curvature_equal_at_pole(self):
        """Test that M equals N at the poles."""
        pole = np.radians(90.0)
        assert radius_of_curvature_meridian(pole) == pytest.approx(
            radius_of_curvature_prime_vertical(pole)
        )


class TestECEF:
    """Test suite for geodetic/ECEF conversions."""

    def test_prime_meridian_on_equator(self):
        """Test that (0, 0) lies on the X axis at distance a."""
        v = geodetic_to_ecef(GeographicPoint(0.0, 0.0))
        assert isinstance(v, EllipsoidalVector)
        assert v.x == pytest.approx(WGS84Ellipsoid.a)
        assert v.y == pytest.approx(0.0, abs=1e-6)
        assert v.z == pytest.approx(0.0, abs=1e-6)

    def test_north_pole_at_semi_minor_axis(self):
        """Test that the pole lies on the Z axis at distance b."""
        v = geodetic_to_ecef(GeographicPoint(90.0, 0.0))
        assert v.z == pytest.approx(WGS84Ellipsoid.b)
        assert np.hypot(v.x, v.y) == pytest.approx(0.0, abs=1e-6)

    @pytest.mark.parametrize("latitude,longitude", ROUND_TRIP_POINTS)
    def test_round_trip(self, latitude, longitude):
        """Test geodetic → ECEF → geodetic."""
        point = GeographicPoint(latitude, longitude)
        recovered = ecef_to_geodetic(geodetic_to_ecef(point))
        assert recovered.latitude == pytest.approx(latitude, abs=1e-9)
        assert recovered.longitude == pytest.approx(longitude, abs=1e-9)

    @pytest.mark.parametrize("z_sign", [1.0, -1.0])
    def test_polar_axis(self, z_sign):
        """Test that vectors on the polar axis map to the poles."""
        point = ecef_to_geodetic(EllipsoidalVector(0.0, 0.0, z_sign * WGS84Ellipsoid.b))
        assert point.latitude == 90.0 * z_sign
        assert point.longitude == 0.0

    def test_rejects_spherical_vector(self):
        """Test that a navigation-sphere vector is refused."""
        with pytest.raises(TypeError):
            ecef_to_geodetic(SphericalVector(1.0, 0.0, 0.0))

    def test_earth_centre_raises(self):
        """Test that the origin has no geodetic position."""
        with pytest.raises(DomainInputError):
            ecef_to_geodetic(EllipsoidalVector(0.0, 0.0, 0.0))

    def test_non_convergence_reported(self):
        """Test that an exhausted iteration bound raises."""
        # Far above the surface the first guess is not exact
        vector = 2.0 * geodetic_to_ecef(GeographicPoint(45.0, 10.0))
        with pytest.raises(NonConvergenceError) as excinfo:
            ecef_to_geodetic(vector, max_iterations=1)
        assert excinfo.value.iterations == 1

    def test_point_above_surface_converges(self):
        """Test that height is discarded but latitude is still found."""
        point = GeographicPoint(30.0, 60.0)
        surface = geodetic_to_ecef(point)
        normal = EllipsoidalVector(
            np.cos(np.radians(30.0)) * np.cos(np.radians(60.0)),
            np.cos(np.radians(30.0)) * np.sin(np.radians(60.0)),
            np.sin(np.radians(30.0)),
        )
        recovered = ecef_to_geodetic(surface + 10_000.0 * normal)
        assert recovered.latitude == pytest.approx(30.0, abs=1e-9)
        assert recovered.longitude == pytest.approx(60.0, abs=1e-9)


class TestNavigationSphere:
    """Test suite for navigation-sphere conversions."""

    @pytest.mark.parametrize("latitude,longitude", ROUND_TRIP_POINTS)
    def test_round_trip(self, latitude, longitude):
        """Test geodetic → sphere → geodetic."""
        vector = geodetic_to_sphere(GeographicPoint(latitude, longitude))
        assert vector.norm() == pytest.approx(NavigationSphere.radius)

        recovered = sphere_to_geodetic(vector)
        assert recovered.latitude == pytest.approx(latitude, abs=1e-9)
        assert recovered.longitude == pytest.approx(longitude, abs=1e-9)

    def test_rejects_ellipsoidal_vector(self):
        """Test that an ECEF vector is refused."""
        with pytest.raises(TypeError):
            sphere_to_geodetic(EllipsoidalVector(1.0, 0.0, 0.0))

    @pytest.mark.parametrize("p1,p2", [
        ((0.0, 0.0), (0.0, 90.0)),
        ((0.0, 0.0), (90.0, 0.0)),
        ((10.0, 20.0), (-30.0, 40.0)),
        ((51.5, -0.1), (40.7, -74.0)),
        ((-45.0, 170.0), (-40.0, -170.0)),
    ])
    def test_cross_matches_cartesian(self, p1, p2):
        """Test the half-angle cross product against numpy."""
        a = GeographicPoint(*p1)
        b = GeographicPoint(*p2)
        expected = np.cross(
            geodetic_to_sphere(a).normalized().as_array(),
            geodetic_to_sphere(b).normalized().as_array(),
        )
        result = spherical_cross(a, b)
        assert isinstance(result, SphericalVector)
        np.testing.assert_allclose(result.as_array(), expected, atol=1e-12)

    def test_cross_of_close_points_is_small_but_nonzero(self):
        """Test accuracy for nearly coincident points."""
        result = spherical_cross(GeographicPoint(10.0, 20.0), GeographicPoint(10.0, 20.0 + 1e-9))
        assert 0.0 < result.norm() < 1e-10
