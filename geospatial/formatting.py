"""
Text rendering of coordinates.

Output-only helpers for display and export. Parsing free-text
coordinates is left to callers.

Formats
-------
- DDD:  ``DD.DDDDDD,-DDD.DDDDDD`` (no space, for spreadsheet import)
- DMM:  ``N DD MM.MMM, W DDD MM.MMM``
- DMS:  ``N DD MM SS.SS, W DDD MM SS.SS``
- UTM:  ``ZZL E eeeeee N nnnnnnn``
"""

import numpy as np

from common.types import GeographicPoint, UTMCoordinate


def _split_minutes(value: float, decimals: int):
    """Whole degrees and decimal minutes of |value|, carried after rounding."""
    magnitude = abs(value)
    whole = int(np.floor(magnitude))
    minutes = round(60.0 * (magnitude - whole), decimals)
    if minutes >= 60.0:
        whole += 1
        minutes = 0.0
    return whole, minutes


def _split_seconds(value: float, decimals: int):
    total_seconds = round(abs(value) * 3600.0, decimals)
    whole = int(total_seconds // 3600)
    minutes = int((total_seconds - whole * 3600) // 60)
    seconds = total_seconds - whole * 3600 - minutes * 60
    return whole, minutes, seconds


def to_ddd(point: GeographicPoint) -> str:
    return f"{point.latitude:.6f},{point.longitude:.6f}"


def to_dmm(point: GeographicPoint) -> str:
    """Degrees and decimal minutes with hemisphere letters."""
    lat_deg, lat_min = _split_minutes(point.latitude, 3)
    lon_deg, lon_min = _split_minutes(point.longitude, 3)
    lat_hemisphere = "N" if point.latitude >= 0 else "S"
    lon_hemisphere = "E" if point.longitude >= 0 else "W"
    return (
        f"{lat_hemisphere} {lat_deg} {lat_min:06.3f}, "
        f"{lon_hemisphere} {lon_deg} {lon_min:06.3f}"
    )


def to_dms(point: GeographicPoint) -> str:
    """Degrees, minutes and decimal seconds with hemisphere letters."""
    lat_deg, lat_min, lat_sec = _split_seconds(point.latitude, 2)
    lon_deg, lon_min, lon_sec = _split_seconds(point.longitude, 2)
    lat_hemisphere = "N" if point.latitude >= 0 else "S"
    lon_hemisphere = "E" if point.longitude >= 0 else "W"
    return (
        f"{lat_hemisphere} {lat_deg} {lat_min:02d} {lat_sec:05.2f}, "
        f"{lon_hemisphere} {lon_deg} {lon_min:02d} {lon_sec:05.2f}"
    )


def format_utm(utm: UTMCoordinate) -> str:
    """Render a UTM coordinate, e.g. ``31N E 500000 N 0``."""
    return f"{utm.zone} E {utm.easting:.0f} N {utm.northing:.0f}"
