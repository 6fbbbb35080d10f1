"""
Universal Transverse Mercator Grid.

The UTM grid divides the Earth between 80°S and 84°N into sixty 6°-wide
zones, each projected with its own Transverse Mercator projection, and
twenty latitude bands lettered C to X (I and O are skipped).

Zone exceptions
---------------
The grid has two irregular areas that must be reproduced exactly:

- South-west Norway: zone 32 is widened to cover 3°E-12°E between 56°N
  and 64°N (taking over part of zone 31).
- Svalbard: between 72°N and 84°N only zones 31, 33, 35 and 37 are used,
  each widened to 9° or 12°.

References
----------
- DMA TM 8358.2, The Universal Grids: UTM and UPS.
"""

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import DomainInputError, InvalidZoneLetterError
from common.logging_config import get_logger
from common.types import GeographicPoint, UTMCoordinate
from geospatial.coordinate_models import WGS84Ellipsoid, EllipsoidParameters
from geospatial.projections import TransverseMercator

logger = get_logger(__name__)

ZONE_LETTERS = GeodeticConstants.UTM_ZONE_LETTERS

# (lon_min, lon_max, zone): lon_min <= longitude < lon_max, 72°N < lat < 84°N
_SVALBARD_ZONES = (
    (0.0, 9.0, 31),
    (9.0, 21.0, 33),
    (21.0, 33.0, 35),
    (33.0, 42.0, 37),
)


def utm_zone(point: GeographicPoint) -> int:
    """Return the UTM zone number of a point, including the exceptions."""
    latitude = point.latitude
    longitude = point.longitude
    width = GeodeticConstants.UTM_ZONE_WIDTH.value

    zone = int(np.floor((longitude + 180.0) / width)) % 60 + 1

    # South-west Norway
    if 56.0 < latitude <= 64.0 and 3.0 < longitude <= 12.0:
        zone = 32

    # Svalbard
    if 72.0 < latitude < 84.0:
        for lon_min, lon_max, special_zone in _SVALBARD_ZONES:
            if lon_min <= longitude < lon_max:
                zone = special_zone
                break

    return zone


def utm_zone_letter(point: GeographicPoint) -> str:
    """Return the UTM latitude band letter of a point.

    Bands are 8° tall starting at 80°S; band X is widened to 12° and
    covers 72°N to 84°N inclusive. Latitudes outside [-80, 84] return
    'Z', which no UTM coordinate may carry.
    """
    latitude = point.latitude
    if 72.0 <= latitude <= 84.0:
        return "X"

    band = int(np.floor((latitude + 80.0) / 8.0))
    if 0 <= band < len(ZONE_LETTERS):
        return ZONE_LETTERS[band]
    return GeodeticConstants.UTM_INVALID_ZONE_LETTER


def central_meridian(zone_number: int) -> float:
    """Central meridian of a UTM zone in degrees."""
    return (zone_number - 1) * GeodeticConstants.UTM_ZONE_WIDTH.value - 180.0 + 3.0


def _zone_projection(
    zone_number: int,
    southern: bool,
    ellipsoid: EllipsoidParameters
) -> TransverseMercator:
    false_northing = GeodeticConstants.UTM_FALSE_NORTHING_SOUTH.value if southern else 0.0
    return TransverseMercator(
        central_meridian_deg=central_meridian(zone_number),
        scale_factor=GeodeticConstants.UTM_SCALE_FACTOR.value,
        false_easting=GeodeticConstants.UTM_FALSE_EASTING.value,
        false_northing=false_northing,
        ellipsoid=ellipsoid
    )


def to_utm(
    point: GeographicPoint,
    rounded: bool = True,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> UTMCoordinate:
    """Convert a geographic point to UTM.

    Parameters
    ----------
    point : GeographicPoint
        Point in degrees, between 80°S and 84°N.
    rounded : bool
        Round easting and northing to the nearest meter (default), as
        UTM coordinates are conventionally written.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    UTMCoordinate
        Zone, band letter, easting and northing. The 10 000 000 m false
        northing is applied for latitudes south of the equator.

    Raises
    ------
    DomainInputError
        If the latitude lies outside the UTM bands.

    Examples
    --------
    >>> to_utm(GeographicPoint(0.0, 3.0))
    UTMCoordinate(zone_number=31, zone_letter='N', easting=500000.0, northing=0.0)
    """
    zone_letter = utm_zone_letter(point)
    if zone_letter == GeodeticConstants.UTM_INVALID_ZONE_LETTER:
        raise DomainInputError(
            f"Latitude {point.latitude} is outside the UTM grid (80°S to 84°N)"
        )
    zone_number = utm_zone(point)

    projection = _zone_projection(zone_number, point.latitude < 0.0, ellipsoid)
    easting, northing = projection.to_projected(point)

    if rounded:
        easting = float(np.floor(easting + 0.5))
        northing = float(np.floor(northing + 0.5))

    return UTMCoordinate(zone_number, zone_letter, easting, northing)


def from_utm(
    zone_number: int,
    zone_letter: str,
    easting: float,
    northing: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeographicPoint:
    """Convert a UTM position to a geographic point.

    Parameters
    ----------
    zone_number : int
        Zone number in [1, 60].
    zone_letter : str
        Band letter; lowercase is accepted. Letters before 'N' are
        southern and carry the 10 000 000 m false northing.
    easting, northing : float
        Grid coordinates in meters.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    GeographicPoint
        Point in degrees, longitude normalized into (-180, 180].

    Raises
    ------
    InvalidZoneLetterError
        If `zone_letter` is not a UTM band letter.
    DomainInputError
        If `zone_number` is outside [1, 60].
    """
    letter = str(zone_letter).upper()
    if len(letter) != 1 or letter not in ZONE_LETTERS:
        logger.warning(f"Rejected UTM zone letter {zone_letter!r}")
        raise InvalidZoneLetterError(zone_letter)
    return from_utm_coordinate(UTMCoordinate(zone_number, letter, easting, northing), ellipsoid)


def from_utm_coordinate(
    utm: UTMCoordinate,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> GeographicPoint:
    """Convert a `UTMCoordinate` to a geographic point."""
    projection = _zone_projection(utm.zone_number, utm.is_southern, ellipsoid)
    return projection.to_geodetic(utm.easting, utm.northing)
