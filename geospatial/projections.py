"""
Map Projections on the Reference Ellipsoid.

This module provides the Transverse Mercator projection used by the UTM
grid, evaluated with the series expansions of Snyder (1987). Projections
share the `ProjectionAdapter` interface so that grid systems can be built
on any of them.

Scientific Context
------------------
Domain: Cartography, mathematical geodesy
Model: Conformal projection of the ellipsoid onto a cylinder tangent
along a meridian.

Accuracy
--------
The series are truncated after the sixth power of the longitude offset.
They are accurate to well below a meter within the 6° width of a UTM
zone and degrade quickly beyond roughly 10° from the central meridian.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof.
  Paper 1395, pp. 60-64.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from common.types import GeographicPoint
from geospatial.coordinate_models import (
    WGS84Ellipsoid,
    EllipsoidParameters,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)


class ProjectionAdapter(ABC):
    """Abstract base class for map projection adapters.

    All projections in this system implement this interface so that
    grid systems can treat them uniformly.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @abstractmethod
    def to_projected(self, point: GeographicPoint) -> Tuple[float, float]:
        """Transform a geographic point to projected coordinates.

        Parameters
        ----------
        point : GeographicPoint
            Point in degrees.

        Returns
        -------
        Tuple[float, float]
            (x, y) projected coordinates in meters.
        """
        pass

    @abstractmethod
    def to_geodetic(self, x: float, y: float) -> GeographicPoint:
        """Transform projected coordinates to a geographic point.

        Parameters
        ----------
        x, y : float
            Projected coordinates in meters.

        Returns
        -------
        GeographicPoint
            Point in degrees.
        """
        pass


class TransverseMercator(ProjectionAdapter):
    """Transverse Mercator projection.

    A conformal (angle-preserving) projection suitable for regions
    that extend primarily north-south. This is the basis for UTM.

    Parameters
    ----------
    central_meridian_deg : float
        Central meridian longitude in degrees.
    scale_factor : float
        Scale factor at central meridian (default: 0.9996 for UTM).
    false_easting : float
        False easting in meters (default: 500000 for UTM).
    false_northing : float
        False northing in meters (default: 0 for northern hemisphere).
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Notes
    -----
    Distortion increases with distance from the central meridian.
    Typically valid within 3° of the central meridian for high accuracy.
    """

    def __init__(
        self,
        central_meridian_deg: float,
        scale_factor: float = 0.9996,
        false_easting: float = 500000.0,
        false_northing: float = 0.0,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid
    ):
        self._central_meridian = central_meridian_deg
        self._scale_factor = scale_factor
        self._false_easting = false_easting
        self._false_northing = false_northing
        self._ellipsoid = ellipsoid

    @property
    def name(self) -> str:
        return f"Transverse Mercator (CM={self._central_meridian}°)"

    @property
    def central_meridian(self) -> float:
        return self._central_meridian

    def _meridional_arc(self, latitude_rad: float) -> float:
        """Distance along the meridian from the equator, M (Snyder 3-21)."""
        a = self._ellipsoid.a
        e2 = self._ellipsoid.e2
        e4 = e2 * e2
        e6 = e4 * e2
        return a * (
            (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * latitude_rad
            - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * np.sin(2 * latitude_rad)
            + (15 * e4 / 256 + 45 * e6 / 1024) * np.sin(4 * latitude_rad)
            - (35 * e6 / 3072) * np.sin(6 * latitude_rad)
        )

    def _longitude_offset(self, longitude_deg: float) -> float:
        """Longitude relative to the central meridian, wrapped into [-π, π]."""
        delta = np.radians(longitude_deg - self._central_meridian)
        return np.arctan2(np.sin(delta), np.cos(delta))

    def to_projected(self, point: GeographicPoint) -> Tuple[float, float]:
        k0 = self._scale_factor
        ep2 = self._ellipsoid.ep2
        lat = np.radians(point.latitude)

        N = radius_of_curvature_prime_vertical(lat, self._ellipsoid)
        T = np.tan(lat) ** 2
        C = ep2 * np.cos(lat) ** 2
        A = np.cos(lat) * self._longitude_offset(point.longitude)
        M = self._meridional_arc(lat)

        x = k0 * N * (
            A
            + (1 - T + C) * A**3 / 6
            + (5 - 18 * T + T * T + 72 * C - 58 * ep2) * A**5 / 120
        )
        y = k0 * (
            M + N * np.tan(lat) * (
                A**2 / 2
                + (5 - T + 9 * C + 4 * C * C) * A**4 / 24
                + (61 - 58 * T + T * T + 600 * C - 330 * ep2) * A**6 / 720
            )
        )

        return float(x + self._false_easting), float(y + self._false_northing)

    def to_geodetic(self, x: float, y: float) -> GeographicPoint:
        k0 = self._scale_factor
        a = self._ellipsoid.a
        e2 = self._ellipsoid.e2
        ep2 = self._ellipsoid.ep2
        e1 = self._ellipsoid.e1

        # Footprint latitude: the latitude whose meridional arc is y / k0
        M = (y - self._false_northing) / k0
        mu = M / (a * (1 - e2 / 4 - 3 * e2**2 / 64 - 5 * e2**3 / 256))
        phi1 = (
            mu
            + (3 * e1 / 2 - 27 * e1**3 / 32) * np.sin(2 * mu)
            + (21 * e1**2 / 16 - 55 * e1**4 / 32) * np.sin(4 * mu)
            + (151 * e1**3 / 96) * np.sin(6 * mu)
        )

        N1 = radius_of_curvature_prime_vertical(phi1, self._ellipsoid)
        R1 = radius_of_curvature_meridian(phi1, self._ellipsoid)
        T1 = np.tan(phi1) ** 2
        C1 = ep2 * np.cos(phi1) ** 2
        D = (x - self._false_easting) / (N1 * k0)

        latitude = phi1 - (N1 * np.tan(phi1) / R1) * (
            D**2 / 2
            - (5 + 3 * T1 + 10 * C1 - 4 * C1 * C1 - 9 * ep2) * D**4 / 24
            + (61 + 90 * T1 + 298 * C1 + 45 * T1 * T1 - 252 * ep2 - 3 * C1 * C1) * D**6 / 720
        )
        longitude = (
            D
            - (1 + 2 * T1 + C1) * D**3 / 6
            + (5 - 2 * C1 + 28 * T1 - 3 * C1 * C1 + 8 * ep2 + 24 * T1 * T1) * D**5 / 120
        ) / np.cos(phi1)

        return GeographicPoint(
            latitude=float(np.degrees(latitude)),
            longitude=float(self._central_meridian + np.degrees(longitude))
        )

    def point_scale_factor(self, point: GeographicPoint) -> float:
        """Point scale factor k at a location (Snyder 8-11).

        Equals `scale_factor` on the central meridian and grows with
        distance from it.
        """
        ep2 = self._ellipsoid.ep2
        lat = np.radians(point.latitude)
        T = np.tan(lat) ** 2
        C = ep2 * np.cos(lat) ** 2
        A = np.cos(lat) * self._longitude_offset(point.longitude)
        return float(self._scale_factor * (
            1
            + (1 + C) * A**2 / 2
            + (5 - 4 * T + 42 * C + 13 * C * C - 28 * ep2) * A**4 / 24
            + (61 - 148 * T + 16 * T * T) * A**6 / 720
        ))
