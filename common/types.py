"""
Value Types for Geodetic Coordinates.

This module defines the immutable value types exchanged between the
geodesy routines and any formatting or storage layer. Every routine that
produces a position returns a new instance; nothing is updated in place.

Units
-----
- Latitude and longitude are in DEGREES.
- Easting and northing are in METERS.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import DomainInputError, InvalidZoneLetterError


def normalize_longitude(longitude_deg: float) -> float:
    """Wrap a longitude into the half-open interval (-180, 180].

    Parameters
    ----------
    longitude_deg : float
        Longitude in degrees, any value.

    Returns
    -------
    float
        Equivalent longitude in (-180, 180].
    """
    if -180.0 < longitude_deg <= 180.0:
        return float(longitude_deg)
    wrapped = (longitude_deg + 180.0) % 360.0 - 180.0
    if wrapped == -180.0:
        return 180.0
    return float(wrapped)


@dataclass(frozen=True)
class GeographicPoint:
    """A geographic point on the reference ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90]. Values outside
        this range are rejected, never wrapped.
    longitude : float
        Geodetic longitude in DEGREES, normalized into (-180, 180].

    Examples
    --------
    >>> GeographicPoint(51.4778, -0.0014)
    GeographicPoint(latitude=51.4778, longitude=-0.0014)
    >>> GeographicPoint(0.0, 181.0).longitude
    -179.0
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate latitude and normalize longitude."""
        latitude = float(self.latitude)
        longitude = float(self.longitude)
        if not (np.isfinite(latitude) and np.isfinite(longitude)):
            raise DomainInputError(
                f"Non-finite coordinate ({latitude}, {longitude})"
            )
        if not -90.0 <= latitude <= 90.0:
            raise DomainInputError(
                f"Latitude {latitude} deg out of range [-90, 90]. "
                f"Did you swap latitude and longitude?"
            )
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", normalize_longitude(longitude))

    @classmethod
    def from_radians(cls, lat_rad: float, lon_rad: float) -> 'GeographicPoint':
        """Create a point from radians (convenience constructor)."""
        return cls(latitude=float(np.degrees(lat_rad)), longitude=float(np.degrees(lon_rad)))

    def to_radians(self) -> Tuple[float, float]:
        """Return (latitude_rad, longitude_rad)."""
        return float(np.radians(self.latitude)), float(np.radians(self.longitude))


@dataclass(frozen=True)
class UTMCoordinate:
    """A position on the Universal Transverse Mercator grid.

    Attributes
    ----------
    zone_number : int
        Zone number in [1, 60].
    zone_letter : str
        Latitude band letter, one of "CDEFGHJKLMNPQRSTUVWX". Lowercase
        input is upper-cased.
    easting : float
        Easting in METERS; 500 000 m on the zone's central meridian.
    northing : float
        Northing in METERS; offset by 10 000 000 m in southern bands.
    """
    zone_number: int
    zone_letter: str
    easting: float
    northing: float

    def __post_init__(self):
        """Validate the zone designation."""
        if not 1 <= int(self.zone_number) <= 60:
            raise DomainInputError(f"UTM zone {self.zone_number} out of range [1, 60]")
        letter = str(self.zone_letter).upper()
        if len(letter) != 1 or letter not in GeodeticConstants.UTM_ZONE_LETTERS:
            raise InvalidZoneLetterError(self.zone_letter)
        object.__setattr__(self, "zone_number", int(self.zone_number))
        object.__setattr__(self, "zone_letter", letter)
        object.__setattr__(self, "easting", float(self.easting))
        object.__setattr__(self, "northing", float(self.northing))

    @property
    def is_southern(self) -> bool:
        """True for bands south of the equator (letters before 'N')."""
        return self.zone_letter < "N"

    @property
    def zone(self) -> str:
        """Zone designation such as '31N'."""
        return f"{self.zone_number}{self.zone_letter}"
