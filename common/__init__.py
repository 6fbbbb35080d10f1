"""
Common infrastructure for the geodesy package.

This package provides foundational components used across all modules:
- Geodetic constants with uncertainty bounds (the configuration layer)
- Error types
- Unit registry and unit-aware coercion
- Geographic and UTM value types
- Logging
"""

from common.constants import Constant, GeodeticConstants
from common.exceptions import (
    GeodesyError,
    DomainInputError,
    InvalidZoneLetterError,
    NonConvergenceError,
    ConsistencyCheckError,
)
from common.units import ureg, Q_, magnitude_in
from common.types import GeographicPoint, UTMCoordinate, normalize_longitude
from common.logging_config import get_logger

__all__ = [
    "Constant",
    "GeodeticConstants",
    "GeodesyError",
    "DomainInputError",
    "InvalidZoneLetterError",
    "NonConvergenceError",
    "ConsistencyCheckError",
    "ureg",
    "Q_",
    "magnitude_in",
    "GeographicPoint",
    "UTMCoordinate",
    "normalize_longitude",
    "get_logger",
]
