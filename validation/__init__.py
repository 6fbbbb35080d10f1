"""
Validation Framework for the Geodesy Routines.

This module provides consistency checks and cross-validation against PROJ.
"""

from validation.consistency_checks import (
    ValidationResult,
    GeodesyConsistencyChecker,
)

__all__ = [
    "ValidationResult",
    "GeodesyConsistencyChecker",
]
