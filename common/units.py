"""
Unit Registry for Geodetic Quantities.

This module provides a centralized unit system using the `pint` library.
Every public routine takes distances in meters and angles in degrees as
plain floats; callers that already carry `pint` quantities may pass those
instead, and they are converted before any arithmetic happens. Passing a
quantity of the wrong dimension raises an error rather than being
silently reinterpreted.

Example Usage
-------------
>>> from common.units import Q_, magnitude_in
>>> magnitude_in(Q_(12, 'nautical_mile'), 'meter')
22224.0
>>> magnitude_in(45.0, 'degree')
45.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

Scalar = Union[float, int, pint.Quantity]


def magnitude_in(value: Scalar, unit: str) -> float:
    """Return `value` as a float expressed in `unit`.

    Parameters
    ----------
    value : float, int or pint.Quantity
        A bare number is taken to be already in `unit`.
    unit : str
        Target unit string (e.g. 'meter', 'degree').

    Returns
    -------
    float
        The magnitude in the requested unit.

    Raises
    ------
    ValueError
        If `value` is a quantity whose dimensionality is incompatible
        with `unit`.
    """
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Incompatible units: expected {unit}, got {value.units}"
            ) from e
    return float(value)


def meters(value: Scalar) -> float:
    """Coerce a distance to meters."""
    return magnitude_in(value, "meter")


def degrees(value: Scalar) -> float:
    """Coerce an angle to degrees."""
    return magnitude_in(value, "degree")
