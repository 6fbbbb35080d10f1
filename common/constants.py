"""
Geodetic Constants for Coordinate Calculations.

This module provides the named constants used by every geodesy routine in
the package, with their uncertainty bounds and sources. It doubles as the
configuration layer: model objects and solver settings take their defaults
from here, and callers override them per call.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM grid parameters: DMA TM 8358.2, The Universal Grids
- Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
  ellipsoid with application of nested equations. Survey Review, 23(176).
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of constants used throughout the system.

    Reference Ellipsoid (WGS84)
    ---------------------------
    Only the two defining parameters are stored. Flattening, eccentricity
    and the semi-minor axis are derived on demand by
    `geospatial.coordinate_models.EllipsoidParameters`.

    Navigation Sphere
    -----------------
    The great-circle routines use a sphere whose arc-minute is exactly one
    nautical mile: R = 1852 * 60 * 180 / π.

    UTM Grid
    --------
    Scale factor and false origin offsets of the UTM system.

    Iterative Solvers
    -----------------
    Convergence tolerance and iteration bound shared by the Vincenty
    solutions and the ECEF inverse.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Inverse flattening of WGS84 ellipsoid: 1/f = a / (a - b)"
    )

    # =========================================================================
    # Spherical Approximation
    # =========================================================================

    EARTH_NAVIGATION_RADIUS: Final[Constant] = Constant(
        value=6_366_707.01896486,
        uncertainty=0.0,  # Defined by the nautical mile
        unit="m",
        source="1 nmi = 1852 m = 1 arc-minute",
        description="Radius of the sphere used for great-circle calculations"
    )

    NAUTICAL_MILE_TO_M: Final[Constant] = Constant(
        value=1852.0,
        uncertainty=0.0,  # Defined exactly
        unit="m per nmi",
        source="IEEE/ASTM SI 10-2016",
        description="Conversion factor from nautical miles to meters"
    )

    SMALL_DISTANCE_THRESHOLD: Final[Constant] = Constant(
        value=0.01,
        uncertainty=0.0,
        unit="m",
        source="Implementation choice",
        description="Below this, great-circle distance falls back to a flat-Earth estimate"
    )

    # =========================================================================
    # UTM Grid Parameters
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor k0 on the central meridian of each UTM zone"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="DMA TM 8358.2",
        description="Easting assigned to the central meridian of each UTM zone"
    )

    UTM_FALSE_NORTHING_SOUTH: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="DMA TM 8358.2",
        description="Northing offset applied in the southern hemisphere"
    )

    UTM_ZONE_WIDTH: Final[Constant] = Constant(
        value=6.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Longitudinal width of a standard UTM zone"
    )

    UTM_ZONE_LETTERS: Final[str] = "CDEFGHJKLMNPQRSTUVWX"
    UTM_INVALID_ZONE_LETTER: Final[str] = "Z"

    # =========================================================================
    # Iterative Solver Settings
    # =========================================================================

    CONVERGENCE_EPSILON: Final[Constant] = Constant(
        value=5e-14,
        uncertainty=0.0,
        unit="rad",
        source="Vincenty (1975), tightened to double precision",
        description="Change below which a fixed-point iteration is converged"
    )

    MAX_SOLVER_ITERATIONS: Final[int] = 100
