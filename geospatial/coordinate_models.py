"""
Coordinate Models for Ellipsoidal and Spherical Earth Geometry.

This module holds the reference surfaces used by the rest of the package
and the conversions between geographic points and Earth-centered
Cartesian vectors on each of them.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Models:
- WGS84 reference ellipsoid for ECEF conversion, Vincenty and UTM
- A fixed-radius navigation sphere for great-circle calculations

The two Cartesian frames are not interchangeable. A vector on the
navigation sphere has magnitude R everywhere, while an ECEF vector on the
ellipsoid ranges from b at the poles to a at the equator.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
- Williams, E. Aviation Formulary V1.47 (cross-track geometry).
"""

from dataclasses import dataclass

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import DomainInputError, NonConvergenceError
from common.logging_config import get_logger
from common.types import GeographicPoint
from geospatial.vectors import EllipsoidalVector, SphericalVector

logger = get_logger(__name__)


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Only the two defining parameters are stored; everything else is
    derived from them on access so the values cannot drift apart.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    inverse_flattening : float
        Inverse flattening 1/f.
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    f : float
        Flattening: f = (a - b) / a
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = 2f - f²
    ep2 : float
        Second eccentricity squared: e'² = e² / (1 - e²)
    e1 : float
        Footprint-latitude series constant:
        e1 = (1 - sqrt(1 - e²)) / (1 + sqrt(1 - e²))
    """
    a: float
    inverse_flattening: float
    name: str

    @property
    def f(self) -> float:
        """Flattening."""
        return 1.0 / self.inverse_flattening

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return 2 * self.f - self.f * self.f

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)

    @property
    def e1(self) -> float:
        root = np.sqrt(1 - self.e2)
        return float((1 - root) / (1 + root))


@dataclass(frozen=True)
class SphereParameters:
    """A sphere used in place of the ellipsoid for cheaper calculations.

    Attributes
    ----------
    radius : float
        Sphere radius in meters.
    name : str
        Identifier for the sphere.
    """
    radius: float
    name: str


# WGS84 ellipsoid - the standard reference for this system
WGS84Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.EARTH_SEMI_MAJOR_AXIS.value,
    inverse_flattening=GeodeticConstants.EARTH_INVERSE_FLATTENING.value,
    name="WGS84"
)

# Sphere on which one arc-minute is one nautical mile
NavigationSphere = SphereParameters(
    radius=GeodeticConstants.EARTH_NAVIGATION_RADIUS.value,
    name="nautical-mile sphere"
)


def radius_of_curvature_meridian(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the radius of curvature in the meridian plane.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature M in meters.

    Notes
    -----
    M = a(1 - e²) / (1 - e² sin²φ)^(3/2)

    At the equator (φ=0): M ≈ 6,335,439 m
    At the poles (φ=±90°): M ≈ 6,399,594 m
    """
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - ellipsoid.e2 * sin_lat**2) ** 1.5
    return float(ellipsoid.a * (1 - ellipsoid.e2) / denominator)


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the radius of curvature in the prime vertical.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature N in meters.

    Notes
    -----
    N = a / (1 - e² sin²φ)^(1/2)

    At the equator (φ=0): N = a ≈ 6,378,137 m
    At the poles (φ=±90°): N ≈ 6,399,594 m
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - ellipsoid.e2 * sin_lat**2)
    return float(ellipsoid.a / denominator)


def geodetic_to_ecef(
    point: GeographicPoint,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> EllipsoidalVector:
    """Convert a geographic point on the ellipsoid surface to ECEF.

    Parameters
    ----------
    point : GeographicPoint
        Point in degrees; height above the ellipsoid is taken as zero.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    EllipsoidalVector
        (X, Y, Z) in meters in the ECEF frame.
    """
    latitude_rad, longitude_rad = point.to_radians()
    sin_lat = np.sin(latitude_rad)
    cos_lat = np.cos(latitude_rad)

    N = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)

    X = N * cos_lat * np.cos(longitude_rad)
    Y = N * cos_lat * np.sin(longitude_rad)
    Z = N * (1 - ellipsoid.e2) * sin_lat

    return EllipsoidalVector(X, Y, Z)


def ecef_to_geodetic(
    vector: EllipsoidalVector,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
    max_iterations: int = GeodeticConstants.MAX_SOLVER_ITERATIONS,
    tolerance: float = GeodeticConstants.CONVERGENCE_EPSILON.value
) -> GeographicPoint:
    """Convert an ECEF vector to a geographic point.

    The latitude is found by fixed-point iteration on t = tan(φ):

        t ← Z / (p - a e² / sqrt(1 + (1 - e²) t²))

    starting from t = Z / (p (1 - e²)), where p is the distance from the
    polar axis. The height above the ellipsoid is discarded.

    Parameters
    ----------
    vector : EllipsoidalVector
        ECEF coordinates in meters.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    max_iterations : int
        Maximum iterations for convergence.
    tolerance : float
        Convergence tolerance on t, relative once |t| exceeds 1.

    Returns
    -------
    GeographicPoint
        Latitude and longitude in degrees.

    Raises
    ------
    TypeError
        If `vector` is not an `EllipsoidalVector`.
    DomainInputError
        If the vector is at the Earth's centre.
    NonConvergenceError
        If the iteration does not settle within `max_iterations`.
    """
    if not isinstance(vector, EllipsoidalVector):
        raise TypeError(
            f"ecef_to_geodetic expects an EllipsoidalVector, got {type(vector).__name__}"
        )

    X, Y, Z = vector.x, vector.y, vector.z
    longitude_rad = np.arctan2(Y, X)

    # Distance from Z-axis
    p = np.sqrt(X**2 + Y**2)

    if p < 1e-9 and abs(Z) < 1e-9:
        raise DomainInputError("The Earth's centre has no geodetic latitude or longitude")

    # Polar axis: latitude is ±90 and longitude is arbitrary
    if p < 1e-9:
        return GeographicPoint(latitude=float(np.copysign(90.0, Z)), longitude=0.0)

    e2 = ellipsoid.e2
    r = ellipsoid.a * e2
    t = Z / (p * (1 - e2))
    change = np.inf

    for iteration in range(1, max_iterations + 1):
        t_last = t
        t = Z / (p - r / np.sqrt(1 + (1 - e2) * t * t))
        # Relative near the poles, where t = tan(φ) grows without bound
        change = abs(t_last - t) / max(1.0, abs(t))
        if change <= tolerance:
            logger.debug(f"ecef_to_geodetic converged in {iteration} iterations")
            return GeographicPoint.from_radians(np.arctan(t), longitude_rad)

    logger.warning(
        f"ecef_to_geodetic failed to converge for ({X:.3f}, {Y:.3f}, {Z:.3f})"
    )
    raise NonConvergenceError("ecef_to_geodetic", max_iterations, float(change))


def geodetic_to_sphere(
    point: GeographicPoint,
    sphere: SphereParameters = NavigationSphere
) -> SphericalVector:
    """Convert a geographic point to its position on the navigation sphere."""
    latitude_rad, longitude_rad = point.to_radians()
    R = sphere.radius
    return SphericalVector(
        R * np.cos(longitude_rad) * np.cos(latitude_rad),
        R * np.sin(longitude_rad) * np.cos(latitude_rad),
        R * np.sin(latitude_rad),
    )


def sphere_to_geodetic(vector: SphericalVector) -> GeographicPoint:
    """Convert a vector in the navigation-sphere frame to a geographic point.

    Only the direction of the vector matters, so any magnitude is accepted.

    Raises
    ------
    TypeError
        If `vector` is not a `SphericalVector`.
    """
    if not isinstance(vector, SphericalVector):
        raise TypeError(
            f"sphere_to_geodetic expects a SphericalVector, got {type(vector).__name__}"
        )
    latitude_rad = np.arctan2(vector.z, np.sqrt(vector.x**2 + vector.y**2))
    longitude_rad = np.arctan2(vector.y, vector.x)
    return GeographicPoint.from_radians(latitude_rad, longitude_rad)


def spherical_cross(p1: GeographicPoint, p2: GeographicPoint) -> SphericalVector:
    """Cross product of the unit-sphere positions of two points.

    The result is not normalized; its magnitude is the sine of the angle
    between the points. Sums and differences of half angles are used
    instead of differencing the Cartesian components, which keeps the
    result accurate when the two points are close together.

    Parameters
    ----------
    p1, p2 : GeographicPoint
        Points in degrees.

    Returns
    -------
    SphericalVector
        p̂1 × p̂2, dimensionless.
    """
    lat1, lon1 = p1.to_radians()
    lat2, lon2 = p2.to_radians()
    delta_lat = lat1 - lat2
    sum_lat = lat1 + lat2
    half_delta_lon = (lon1 - lon2) / 2
    mean_lon = (lon1 + lon2) / 2

    return SphericalVector(
        np.sin(sum_lat) * np.cos(mean_lon) * np.sin(half_delta_lon)
        - np.sin(delta_lat) * np.sin(mean_lon) * np.cos(half_delta_lon),
        np.sin(delta_lat) * np.cos(mean_lon) * np.cos(half_delta_lon)
        + np.sin(sum_lat) * np.sin(mean_lon) * np.sin(half_delta_lon),
        np.cos(lat1) * np.cos(lat2) * np.sin(-2 * half_delta_lon),
    )
