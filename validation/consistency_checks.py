"""
Consistency Checks for Geodesy Routines.

This module provides checks that verify the coordinate calculations obey
the properties they are expected to have, and agree with an independent
reference implementation (PROJ, through `pyproj`).

Check Categories
----------------
1. Symmetry (distance p1→p2 equals distance p2→p1)
2. Round trips (UTM, ECEF, direct then inverse)
3. Reference agreement (geodesics against `pyproj.Geod`, UTM against
   the EPSG:326xx / EPSG:327xx grids)
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Any

import numpy as np
from pyproj import CRS, Geod, Transformer

from common.exceptions import ConsistencyCheckError, GeodesyError
from common.logging_config import get_logger
from common.types import GeographicPoint
from geospatial.coordinate_models import (
    WGS84Ellipsoid,
    EllipsoidParameters,
    ecef_to_geodetic,
    geodetic_to_ecef,
)
from geospatial.distance_calculations import vincenty_direct, vincenty_inverse
from geospatial.great_circle import spherical_distance
from geospatial.utm import from_utm_coordinate, to_utm

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def _angle_difference(a_deg: float, b_deg: float) -> float:
    """Smallest absolute difference between two angles in degrees."""
    delta = np.radians(a_deg - b_deg)
    return float(abs(np.degrees(np.arctan2(np.sin(delta), np.cos(delta)))))


class GeodesyConsistencyChecker:
    """Checker for internal and external consistency of the geodesy routines.

    Parameters
    ----------
    strict_mode : bool
        If True, raise `ConsistencyCheckError` on the first failed check.
    log_violations : bool
        Whether to log failed checks at WARNING.
    ellipsoid : EllipsoidParameters
        Ellipsoid used by the ellipsoidal checks (default: WGS84). The UTM
        reference check always compares on WGS84.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid
    ):
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self.ellipsoid = ellipsoid
        self._logger = get_logger("GeodesyConsistencyChecker")
        self._geod = Geod(a=ellipsoid.a, f=ellipsoid.f)

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} failed: {result.message}")
            if self.strict_mode:
                raise ConsistencyCheckError(f"{result.test_name}: {result.message}")
        else:
            self._logger.debug(f"{result.test_name} passed: {result.message}")
        return result

    def check_all(
        self,
        points: Sequence[GeographicPoint]
    ) -> List[ValidationResult]:
        """Run all checks on a sequence of points.

        Point checks run on every point; pair checks run on consecutive
        pairs. The UTM checks skip points outside the UTM latitude range.
        A pair whose solvers fail (for example a near-antipodal pair
        that does not converge) is recorded as a failed `geodesic_pair`
        result and the remaining pairs are still checked.

        Parameters
        ----------
        points : sequence of GeographicPoint
            Points to check.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        results = []

        for point in points:
            results.append(self.check_ecef_round_trip(point))
            if -80.0 <= point.latitude <= 84.0:
                results.append(self.check_utm_round_trip(point))
                results.append(self.check_utm_against_reference(point))

        for p1, p2 in zip(points[:-1], points[1:]):
            try:
                results.append(self.check_distance_symmetry(p1, p2))
                results.append(self.check_against_reference(p1, p2))
                forward = vincenty_inverse(p1, p2, self.ellipsoid)
                results.append(
                    self.check_direct_inverse(p1, forward.forward_azimuth_deg, forward.distance_m)
                )
            except ConsistencyCheckError:
                raise
            except GeodesyError as e:
                results.append(self._report(ValidationResult(
                    test_name="geodesic_pair",
                    passed=False,
                    message=f"{type(e).__name__} between {p1} and {p2}: {e}",
                    details={'p1': p1, 'p2': p2, 'error': e}
                )))

        num_failed = sum(1 for result in results if not result.passed)
        logger.info(f"Ran {len(results)} consistency checks, {num_failed} failed")
        return results

    def check_distance_symmetry(
        self,
        p1: GeographicPoint,
        p2: GeographicPoint,
        tolerance_m: float = 1e-6
    ) -> ValidationResult:
        """Check that spherical and geodesic distances are symmetric."""
        geodesic_12 = vincenty_inverse(p1, p2, self.ellipsoid).distance_m
        geodesic_21 = vincenty_inverse(p2, p1, self.ellipsoid).distance_m
        spherical_12 = spherical_distance(p1, p2)
        spherical_21 = spherical_distance(p2, p1)

        geodesic_error = abs(geodesic_12 - geodesic_21)
        spherical_error = abs(spherical_12 - spherical_21)

        return self._report(ValidationResult(
            test_name="distance_symmetry",
            passed=max(geodesic_error, spherical_error) <= tolerance_m,
            message=f"Distance asymmetry: geodesic {geodesic_error:.3e} m, "
                    f"spherical {spherical_error:.3e} m",
            details={
                'geodesic_distance_m': geodesic_12,
                'spherical_distance_m': spherical_12,
                'geodesic_error_m': geodesic_error,
                'spherical_error_m': spherical_error,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_utm_round_trip(
        self,
        point: GeographicPoint,
        tolerance_deg: float = 1e-6
    ) -> ValidationResult:
        """Check that to_utm followed by from_utm recovers the point.

        Uses unrounded grid coordinates so the tolerance reflects the
        projection series rather than the 1 m rounding.
        """
        utm = to_utm(point, rounded=False, ellipsoid=self.ellipsoid)
        recovered = from_utm_coordinate(utm, self.ellipsoid)

        lat_error = abs(recovered.latitude - point.latitude)
        lon_error = _angle_difference(recovered.longitude, point.longitude)

        return self._report(ValidationResult(
            test_name="utm_round_trip",
            passed=max(lat_error, lon_error) <= tolerance_deg,
            message=f"UTM round trip via {utm.zone}: "
                    f"dlat={lat_error:.3e}°, dlon={lon_error:.3e}°",
            details={
                'zone': utm.zone,
                'easting': utm.easting,
                'northing': utm.northing,
                'lat_error_deg': lat_error,
                'lon_error_deg': lon_error,
                'tolerance_deg': tolerance_deg,
            }
        ))

    def check_ecef_round_trip(
        self,
        point: GeographicPoint,
        tolerance_deg: float = 1e-9
    ) -> ValidationResult:
        """Check that geodetic → ECEF → geodetic recovers the point."""
        recovered = ecef_to_geodetic(geodetic_to_ecef(point, self.ellipsoid), self.ellipsoid)

        lat_error = abs(recovered.latitude - point.latitude)
        # Longitude is undefined on the polar axis
        if abs(point.latitude) == 90.0:
            lon_error = 0.0
        else:
            lon_error = _angle_difference(recovered.longitude, point.longitude)

        return self._report(ValidationResult(
            test_name="ecef_round_trip",
            passed=max(lat_error, lon_error) <= tolerance_deg,
            message=f"ECEF round trip: dlat={lat_error:.3e}°, dlon={lon_error:.3e}°",
            details={
                'lat_error_deg': lat_error,
                'lon_error_deg': lon_error,
                'tolerance_deg': tolerance_deg,
            }
        ))

    def check_direct_inverse(
        self,
        origin: GeographicPoint,
        azimuth_deg: float,
        distance_m: float,
        tolerance_m: float = 1e-3
    ) -> ValidationResult:
        """Check that the inverse solution recovers a direct solution's distance."""
        destination = vincenty_direct(origin, azimuth_deg, distance_m, self.ellipsoid)
        result = vincenty_inverse(origin, destination, self.ellipsoid)

        distance_error = abs(result.distance_m - distance_m)

        return self._report(ValidationResult(
            test_name="direct_inverse",
            passed=distance_error <= tolerance_m,
            message=f"Direct/inverse distance error: {distance_error:.3e} m",
            details={
                'destination': destination,
                'expected_distance_m': float(distance_m),
                'recovered_distance_m': result.distance_m,
                'distance_error_m': distance_error,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_against_reference(
        self,
        p1: GeographicPoint,
        p2: GeographicPoint,
        tolerance_m: float = 0.01,
        tolerance_deg: float = 1e-6
    ) -> ValidationResult:
        """Check the Vincenty inverse against `pyproj.Geod`.

        The reference uses Karney's algorithm, which is accurate to a few
        nanometers, so differences measure the Vincenty series error.
        """
        result = vincenty_inverse(p1, p2, self.ellipsoid)
        ref_az12, _, ref_distance = self._geod.inv(
            p1.longitude, p1.latitude, p2.longitude, p2.latitude
        )

        distance_error = abs(result.distance_m - ref_distance)
        # Azimuth is arbitrary between coincident points
        if ref_distance > 0.0:
            azimuth_error = _angle_difference(result.forward_azimuth_deg, ref_az12)
        else:
            azimuth_error = 0.0

        return self._report(ValidationResult(
            test_name="geodesic_reference",
            passed=distance_error <= tolerance_m and azimuth_error <= tolerance_deg,
            message=f"Vincenty vs PROJ: {distance_error:.3e} m, {azimuth_error:.3e}°",
            details={
                'distance_m': result.distance_m,
                'reference_distance_m': float(ref_distance),
                'distance_error_m': distance_error,
                'azimuth_error_deg': azimuth_error,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_utm_against_reference(
        self,
        point: GeographicPoint,
        tolerance_m: float = 1.0
    ) -> ValidationResult:
        """Check UTM grid coordinates against PROJ's WGS84 UTM zones.

        Compares in the zone chosen by `to_utm`, including the Norway
        and Svalbard exceptions.
        """
        utm = to_utm(point, rounded=False)
        epsg = (32700 if point.latitude < 0.0 else 32600) + utm.zone_number
        transformer = Transformer.from_crs(
            CRS.from_epsg(4326), CRS.from_epsg(epsg), always_xy=True
        )
        ref_easting, ref_northing = transformer.transform(point.longitude, point.latitude)

        easting_error = abs(utm.easting - ref_easting)
        northing_error = abs(utm.northing - ref_northing)

        return self._report(ValidationResult(
            test_name="utm_reference",
            passed=max(easting_error, northing_error) <= tolerance_m,
            message=f"UTM vs EPSG:{epsg}: dE={easting_error:.3f} m, dN={northing_error:.3f} m",
            details={
                'epsg': epsg,
                'easting_error_m': float(easting_error),
                'northing_error_m': float(northing_error),
                'tolerance_m': tolerance_m,
            }
        ))
