"""
Geospatial Module.

All Earth-surface calculations in the package originate from this module.

This module provides:
- Reference ellipsoid and navigation sphere models
- Conversions between geographic points and Earth-centered vectors
- Great-circle distance, bearing and projection on the sphere
- Vincenty geodesic distance and projection on the ellipsoid
- Transverse Mercator projection and the UTM grid
- Text rendering of coordinates
"""

from geospatial.vectors import (
    CartesianVector,
    EllipsoidalVector,
    SphericalVector,
)

from geospatial.coordinate_models import (
    EllipsoidParameters,
    SphereParameters,
    WGS84Ellipsoid,
    NavigationSphere,
    geodetic_to_ecef,
    ecef_to_geodetic,
    geodetic_to_sphere,
    sphere_to_geodetic,
    spherical_cross,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

from geospatial.great_circle import (
    spherical_distance,
    spherical_azimuth,
    spherical_projection,
    distance_to_arc,
    is_between,
)

from geospatial.distance_calculations import (
    GeodesicResult,
    vincenty_inverse,
    vincenty_direct,
    vincenty_direct_with_azimuth,
    geodesic_distance,
    compute_azimuth,
    interpolate_geodesic,
)

from geospatial.projections import (
    ProjectionAdapter,
    TransverseMercator,
)

from geospatial.utm import (
    utm_zone,
    utm_zone_letter,
    central_meridian,
    to_utm,
    from_utm,
    from_utm_coordinate,
)

from geospatial.formatting import (
    to_ddd,
    to_dmm,
    to_dms,
    format_utm,
)

__all__ = [
    # Vectors
    "CartesianVector",
    "EllipsoidalVector",
    "SphericalVector",
    # Coordinate models
    "EllipsoidParameters",
    "SphereParameters",
    "WGS84Ellipsoid",
    "NavigationSphere",
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "geodetic_to_sphere",
    "sphere_to_geodetic",
    "spherical_cross",
    "radius_of_curvature_meridian",
    "radius_of_curvature_prime_vertical",
    # Great circles
    "spherical_distance",
    "spherical_azimuth",
    "spherical_projection",
    "distance_to_arc",
    "is_between",
    # Geodesics
    "GeodesicResult",
    "vincenty_inverse",
    "vincenty_direct",
    "vincenty_direct_with_azimuth",
    "geodesic_distance",
    "compute_azimuth",
    "interpolate_geodesic",
    # Projections
    "ProjectionAdapter",
    "TransverseMercator",
    "utm_zone",
    "utm_zone_letter",
    "central_meridian",
    "to_utm",
    "from_utm",
    "from_utm_coordinate",
    # Formatting
    "to_ddd",
    "to_dmm",
    "to_dms",
    "format_utm",
]
