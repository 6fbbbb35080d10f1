"""
Great-Circle Geometry on the Navigation Sphere.

This module provides the cheap, lower-accuracy alternative to the
ellipsoidal routines in `geospatial.distance_calculations`. Every
calculation treats the Earth as a sphere of fixed radius (by default the
sphere on which one arc-minute is one nautical mile).

Accuracy
--------
The spherical model introduces errors of up to about 0.5% in distance
compared with the ellipsoid. Use the Vincenty routines where that matters.

Betweenness
-----------
`is_between` and the sign of `distance_to_arc` rely on a planar
parametrization of the chord between two points, with longitude
differences scaled by cos(latitude). It is a local-linear approximation:
it is not reliable near the poles or for segments that cross the
antimeridian.

References
----------
- Williams, E. Aviation Formulary V1.47.
"""

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import DomainInputError
from common.types import GeographicPoint
from common.units import Scalar, degrees, meters
from geospatial.coordinate_models import (
    NavigationSphere,
    SphereParameters,
    geodetic_to_sphere,
    spherical_cross,
)


def spherical_distance(
    p1: GeographicPoint,
    p2: GeographicPoint,
    sphere: SphereParameters = NavigationSphere
) -> float:
    """Compute the great-circle distance between two points.

    Parameters
    ----------
    p1, p2 : GeographicPoint
        End points in degrees.
    sphere : SphereParameters
        Sphere to measure on (default: navigation sphere).

    Returns
    -------
    float
        Distance in meters.

    Notes
    -----
    Uses the spherical law of cosines. For separations below 1 cm the
    arccosine loses all precision, so the distance is recomputed with a
    flat-Earth estimate from the latitude and longitude differences.
    """
    lat1, lon1 = p1.to_radians()
    lat2, lon2 = p2.to_radians()
    delta_lon = lon1 - lon2
    delta_lat = lat1 - lat2

    cos_angle = (np.sin(lat1) * np.sin(lat2)
                 + np.cos(lat1) * np.cos(lat2) * np.cos(delta_lon))
    angle = np.arccos(np.clip(cos_angle, -1.0, 1.0))
    distance = sphere.radius * angle

    if distance < GeodeticConstants.SMALL_DISTANCE_THRESHOLD.value:
        # Wrap so points either side of the antimeridian stay close
        delta_lon = np.arctan2(np.sin(delta_lon), np.cos(delta_lon))
        delta_lon *= np.cos(lat2)
        distance = sphere.radius * np.sqrt(delta_lat**2 + delta_lon**2)

    return float(distance)


def spherical_azimuth(p1: GeographicPoint, p2: GeographicPoint) -> float:
    """Initial great-circle bearing from p1 to p2.

    Returns
    -------
    float
        Azimuth in degrees clockwise from north, in [0, 360). Coincident
        points give 0.
    """
    lat1, lon1 = p1.to_radians()
    lat2, lon2 = p2.to_radians()
    delta_lon = lon2 - lon1

    y = np.sin(delta_lon) * np.cos(lat2)
    x = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(delta_lon)
    return float(np.degrees(np.arctan2(y, x)) % 360.0)


def spherical_projection(
    origin: GeographicPoint,
    azimuth_deg: Scalar,
    distance_m: Scalar,
    sphere: SphereParameters = NavigationSphere
) -> GeographicPoint:
    """Travel along a great circle from `origin`.

    Parameters
    ----------
    origin : GeographicPoint
        Starting point in degrees.
    azimuth_deg : float or pint.Quantity
        Initial bearing, degrees clockwise from north.
    distance_m : float or pint.Quantity
        Distance to travel, meters.
    sphere : SphereParameters
        Sphere to travel on (default: navigation sphere).

    Returns
    -------
    GeographicPoint
        Destination, with longitude normalized into (-180, 180].

    Raises
    ------
    DomainInputError
        If the azimuth or the distance is not finite.

    Examples
    --------
    >>> # One degree of arc due north of the equator
    >>> round(spherical_projection(GeographicPoint(0.0, 0.0), 0.0, 111_120.0).latitude, 9)
    1.0
    """
    azimuth = np.radians(degrees(azimuth_deg))
    s = meters(distance_m) / sphere.radius
    if not (np.isfinite(azimuth) and np.isfinite(s)):
        raise DomainInputError(
            f"Azimuth and distance must be finite, got {azimuth_deg} and {distance_m}"
        )
    lat1, lon1 = origin.to_radians()

    lat2 = np.arcsin(np.clip(
        np.sin(lat1) * np.cos(s) + np.cos(lat1) * np.sin(s) * np.cos(azimuth),
        -1.0, 1.0
    ))
    delta_lon = np.arctan2(
        np.sin(azimuth) * np.sin(s) * np.cos(lat1),
        np.cos(s) - np.sin(lat1) * np.sin(lat2)
    )

    return GeographicPoint.from_radians(lat2, lon1 + delta_lon)


def is_between(point: GeographicPoint, p1: GeographicPoint, p2: GeographicPoint) -> bool:
    """Approximate test of whether `point` lies between `p1` and `p2`.

    The point is projected onto the straight line from p1 to p2 in a
    plane where longitude differences are scaled by cos(latitude), giving
    a parameter u that is 0 at p1 and 1 at p2.

    Returns
    -------
    bool
        True iff 0 <= u < 1. False when p1 and p2 coincide.
    """
    cos_lat2 = np.cos(np.radians(point.latitude)) ** 2
    d_lon = p2.longitude - p1.longitude
    d_lat = p2.latitude - p1.latitude

    denominator = d_lon * d_lon * cos_lat2 + d_lat * d_lat
    if denominator == 0.0:
        return False

    u = ((point.longitude - p1.longitude) * d_lon * cos_lat2
         + (point.latitude - p1.latitude) * d_lat) / denominator

    return bool(0.0 <= u < 1.0)


def distance_to_arc(
    point: GeographicPoint,
    p1: GeographicPoint,
    p2: GeographicPoint,
    sphere: SphereParameters = NavigationSphere
) -> float:
    """Distance from `point` to the great circle through p1 and p2.

    Parameters
    ----------
    point : GeographicPoint
        Point whose cross-track distance is wanted.
    p1, p2 : GeographicPoint
        Points defining the great circle.
    sphere : SphereParameters
        Sphere to measure on (default: navigation sphere).

    Returns
    -------
    float
        Cross-track distance in meters. The magnitude is the distance to
        the full great circle; the sign is positive when `is_between`
        considers the point to lie between p1 and p2, negative otherwise.

    Raises
    ------
    DomainInputError
        If p1 and p2 coincide (or are antipodal) so that no unique great
        circle passes through them.
    """
    normal = spherical_cross(p1, p2)
    # |n| is the sine of the angle between p1 and p2; coincident or
    # antipodal endpoints leave only rounding noise
    if normal.norm() < 1e-12:
        raise DomainInputError(
            f"Points {p1} and {p2} do not define a unique great circle"
        )
    normal = normal.normalized()
    position = geodetic_to_sphere(point, sphere).normalized()

    angle = np.arcsin(np.clip(normal.dot(position), -1.0, 1.0))
    distance = abs(sphere.radius * angle)

    sign = 1.0 if is_between(point, p1, p2) else -1.0
    return float(sign * distance)
