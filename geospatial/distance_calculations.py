"""
Geodesic Distance Calculations on the Reference Ellipsoid.

This module solves the two classical geodesic problems on the WGS84
ellipsoid with Vincenty's nested-equation method:

- inverse: given two points, find the distance and the azimuths;
- direct: given a point, an azimuth and a distance, find the endpoint.

Scientific Context
------------------
Domain: Geodesy, differential geometry on curved surfaces
Model: Geodesic (shortest path) on reference ellipsoid

Both solutions are fixed-point iterations on an angle of the auxiliary
sphere (λ for the inverse, σ for the direct problem). They converge in a
handful of iterations for ordinary inputs, to within 0.5 mm of the true
geodesic. Near-antipodal points converge slowly or not at all; every
loop is therefore bounded and reports failure with NonConvergenceError,
letting the caller fall back to `geospatial.great_circle`.

References
----------
- Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
  ellipsoid with application of nested equations. Survey Review, 23(176).
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import DomainInputError, NonConvergenceError
from common.logging_config import get_logger
from common.types import GeographicPoint
from common.units import Scalar, degrees, meters
from geospatial.coordinate_models import WGS84Ellipsoid, EllipsoidParameters

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeodesicResult:
    """Result of an inverse geodesic calculation.

    Attributes
    ----------
    distance_m : float
        Geodesic (shortest path) distance in meters.
    forward_azimuth_deg : float
        Azimuth at point 1 towards point 2, degrees clockwise from
        north in [0, 360).
    reverse_azimuth_deg : float
        Azimuth at point 2 back towards point 1, degrees clockwise from
        north in [0, 360).
    iterations : int
        Number of λ iterations performed (0 for coincident points).
    """
    distance_m: float
    forward_azimuth_deg: float
    reverse_azimuth_deg: float
    iterations: int = 0


def _reduced_latitude(latitude_rad: float, ellipsoid: EllipsoidParameters) -> Tuple[float, float]:
    """Return (sin U, cos U) of the reduced latitude tan U = (1 - f) tan φ."""
    U = np.arctan((1 - ellipsoid.f) * np.tan(latitude_rad))
    return np.sin(U), np.cos(U)


def _series_coefficients(cos2_alpha: float, ellipsoid: EllipsoidParameters) -> Tuple[float, float]:
    """Vincenty's A and B coefficients for a geodesic with the given cos²α."""
    a, b = ellipsoid.a, ellipsoid.b
    u2 = cos2_alpha * (a * a - b * b) / (b * b)
    A = 1 + u2 / 16384 * (4096 + u2 * (-768 + u2 * (320 - 175 * u2)))
    B = u2 / 1024 * (256 + u2 * (-128 + u2 * (74 - 47 * u2)))
    return A, B


def _delta_sigma(B: float, sin_sigma: float, cos_sigma: float, cos_2sigma_m: float) -> float:
    return B * sin_sigma * (
        cos_2sigma_m + B / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m**2)
            - B / 6 * cos_2sigma_m * (-3 + 4 * sin_sigma**2) * (-3 + 4 * cos_2sigma_m**2)
        )
    )


def vincenty_inverse(
    p1: GeographicPoint,
    p2: GeographicPoint,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
    max_iterations: int = GeodeticConstants.MAX_SOLVER_ITERATIONS,
    tolerance: float = GeodeticConstants.CONVERGENCE_EPSILON.value
) -> GeodesicResult:
    """Solve the inverse geodesic problem.

    Given two points, find the distance and azimuths between them.

    Parameters
    ----------
    p1, p2 : GeographicPoint
        End points in degrees.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    max_iterations : int
        Bound on the λ iteration.
    tolerance : float
        Convergence tolerance on λ in radians.

    Returns
    -------
    GeodesicResult
        Distance in meters, forward and reverse azimuths in degrees.

    Raises
    ------
    NonConvergenceError
        If λ does not settle within `max_iterations`, typically for
        nearly antipodal points.

    Examples
    --------
    >>> result = vincenty_inverse(GeographicPoint(0.0, 0.0), GeographicPoint(0.0, 1.0))
    >>> print(f"{result.distance_m:.2f} m, azimuth {result.forward_azimuth_deg:.1f}")
    111319.49 m, azimuth 90.0
    """
    if p1.latitude == p2.latitude and p1.longitude == p2.longitude:
        return GeodesicResult(distance_m=0.0, forward_azimuth_deg=0.0, reverse_azimuth_deg=0.0)

    f = ellipsoid.f
    lat1, lon1 = p1.to_radians()
    lat2, lon2 = p2.to_radians()

    sin_u1, cos_u1 = _reduced_latitude(lat1, ellipsoid)
    sin_u2, cos_u2 = _reduced_latitude(lat2, ellipsoid)

    # Difference in longitude on the ellipsoid, wrapped into [-π, π]
    L = np.arctan2(np.sin(lon2 - lon1), np.cos(lon2 - lon1))
    lam = L
    change = np.inf

    for iteration in range(1, max_iterations + 1):
        sin_lam = np.sin(lam)
        cos_lam = np.cos(lam)
        ss1 = cos_u2 * sin_lam
        ss2 = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam
        sin_sigma = np.sqrt(ss1 * ss1 + ss2 * ss2)
        if sin_sigma == 0.0:
            # Distinct coordinates naming the same place (e.g. a pole)
            return GeodesicResult(0.0, 0.0, 0.0, iteration)
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = np.arctan2(sin_sigma, cos_sigma)

        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos2_alpha = 1 - sin_alpha * sin_alpha
        if cos2_alpha != 0.0:
            cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos2_alpha
        else:
            # Equatorial line
            cos_2sigma_m = 0.0

        C = f / 16 * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))
        lam_prev = lam
        lam = L + (1 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m**2))
        )
        change = abs(lam - lam_prev)
        if change <= tolerance:
            break
    else:
        logger.warning(
            f"Vincenty inverse did not converge between {p1} and {p2}; "
            f"points may be nearly antipodal"
        )
        raise NonConvergenceError("vincenty_inverse", max_iterations, float(change))

    logger.debug(f"Vincenty inverse converged in {iteration} iterations")

    A, B = _series_coefficients(cos2_alpha, ellipsoid)
    delta_sigma = _delta_sigma(B, sin_sigma, cos_sigma, cos_2sigma_m)
    distance = ellipsoid.b * A * (sigma - delta_sigma)

    sin_lam = np.sin(lam)
    cos_lam = np.cos(lam)
    alpha12 = np.degrees(np.arctan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam))
    alpha21 = np.degrees(np.arctan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam))

    return GeodesicResult(
        distance_m=float(distance),
        forward_azimuth_deg=float((alpha12 + 360.0) % 360.0),
        reverse_azimuth_deg=float((alpha21 + 180.0) % 360.0),
        iterations=iteration
    )


def vincenty_direct_with_azimuth(
    origin: GeographicPoint,
    azimuth_deg: Scalar,
    distance_m: Scalar,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
    max_iterations: int = GeodeticConstants.MAX_SOLVER_ITERATIONS,
    tolerance: float = GeodeticConstants.CONVERGENCE_EPSILON.value
) -> Tuple[GeographicPoint, float]:
    """Solve the direct geodesic problem, also returning the reverse azimuth.

    Parameters
    ----------
    origin : GeographicPoint
        Starting point in degrees.
    azimuth_deg : float or pint.Quantity
        Forward azimuth, degrees clockwise from north.
    distance_m : float or pint.Quantity
        Distance to travel along the geodesic, meters.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    max_iterations : int
        Bound on the σ iteration.
    tolerance : float
        Convergence tolerance on σ in radians.

    Returns
    -------
    Tuple[GeographicPoint, float]
        Destination (longitude normalized into (-180, 180]) and the
        azimuth from the destination back to the origin, in [0, 360).

    Raises
    ------
    DomainInputError
        If the azimuth or the distance is not finite.
    NonConvergenceError
        If σ does not settle within `max_iterations`.
    """
    f = ellipsoid.f
    alpha1 = np.radians(degrees(azimuth_deg))
    s = meters(distance_m)
    if not (np.isfinite(alpha1) and np.isfinite(s)):
        raise DomainInputError(
            f"Azimuth and distance must be finite, got {azimuth_deg} and {distance_m}"
        )
    lat1, lon1 = origin.to_radians()

    sin_alpha1 = np.sin(alpha1)
    cos_alpha1 = np.cos(alpha1)
    sin_u1, cos_u1 = _reduced_latitude(lat1, ellipsoid)

    # Angular distance on the auxiliary sphere from the equator to origin
    sigma1 = np.arctan2(sin_u1 / cos_u1, cos_alpha1)
    sin_alpha = cos_u1 * sin_alpha1
    cos2_alpha = 1 - sin_alpha * sin_alpha

    A, B = _series_coefficients(cos2_alpha, ellipsoid)

    sigma = s / (ellipsoid.b * A)
    change = np.inf
    for iteration in range(1, max_iterations + 1):
        cos_2sigma_m = np.cos(2 * sigma1 + sigma)
        delta_sigma = _delta_sigma(B, np.sin(sigma), np.cos(sigma), cos_2sigma_m)
        sigma_prev = sigma
        sigma = s / (ellipsoid.b * A) + delta_sigma
        change = abs(sigma - sigma_prev)
        if change <= tolerance:
            break
    else:
        logger.warning(
            f"Vincenty direct did not converge from {origin} "
            f"(azimuth {np.degrees(alpha1):.6f}, distance {s:.3f} m)"
        )
        raise NonConvergenceError("vincenty_direct", max_iterations, float(change))

    logger.debug(f"Vincenty direct converged in {iteration} iterations")

    sin_sigma = np.sin(sigma)
    cos_sigma = np.cos(sigma)
    cos_2sigma_m = np.cos(2 * sigma1 + sigma)

    x = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    lat2 = np.arctan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
        (1 - f) * np.sqrt(sin_alpha * sin_alpha + x * x)
    )

    lam = np.arctan2(sin_sigma * sin_alpha1, cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1)
    C = f / 16 * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))
    L = lam - (1 - C) * f * sin_alpha * (
        sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m**2))
    )

    alpha2 = np.degrees(np.arctan2(sin_alpha, -x))
    reverse_azimuth = float((alpha2 + 180.0) % 360.0)

    return GeographicPoint.from_radians(lat2, lon1 + L), reverse_azimuth


def vincenty_direct(
    origin: GeographicPoint,
    azimuth_deg: Scalar,
    distance_m: Scalar,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
    max_iterations: int = GeodeticConstants.MAX_SOLVER_ITERATIONS,
    tolerance: float = GeodeticConstants.CONVERGENCE_EPSILON.value
) -> GeographicPoint:
    """Solve the direct geodesic problem.

    Given a starting point, azimuth, and distance, find the endpoint.

    Examples
    --------
    >>> # Travel 1000 km due east from the equator
    >>> end = vincenty_direct(GeographicPoint(0.0, 0.0), 90.0, 1_000_000)
    >>> print(f"Endpoint: {end.latitude:.4f}°, {end.longitude:.4f}°")
    Endpoint: 0.0000°, 8.9832°
    """
    destination, _ = vincenty_direct_with_azimuth(
        origin, azimuth_deg, distance_m, ellipsoid, max_iterations, tolerance
    )
    return destination


def geodesic_distance(
    p1: GeographicPoint,
    p2: GeographicPoint,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute geodesic distance between two points in meters.

    This is a convenience function that returns only the distance.
    """
    return vincenty_inverse(p1, p2, ellipsoid).distance_m


def compute_azimuth(
    p1: GeographicPoint,
    p2: GeographicPoint,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the forward azimuth from point 1 to point 2.

    Returns
    -------
    float
        Forward azimuth in degrees, measured clockwise from north [0, 360).
    """
    return vincenty_inverse(p1, p2, ellipsoid).forward_azimuth_deg


def interpolate_geodesic(
    p1: GeographicPoint,
    p2: GeographicPoint,
    num_points: int,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> List[GeographicPoint]:
    """Interpolate points along the geodesic between two endpoints.

    Parameters
    ----------
    p1, p2 : GeographicPoint
        End points.
    num_points : int
        Number of points including endpoints (at least 2).
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    List[GeographicPoint]
        Points equally spaced in distance along the geodesic; the first
        and last are p1 and p2 themselves.
    """
    if num_points < 2:
        raise DomainInputError(f"num_points must be at least 2, got {num_points}")

    result = vincenty_inverse(p1, p2, ellipsoid)
    distances = np.linspace(0.0, result.distance_m, num_points)

    points = [p1]
    for distance in distances[1:-1]:
        points.append(vincenty_direct(p1, result.forward_azimuth_deg, float(distance), ellipsoid))
    points.append(p2)

    return points
