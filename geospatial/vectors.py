"""
Cartesian Vectors in Earth-Centered Frames.

Two different Cartesian representations appear in this package:

1. `EllipsoidalVector`: true Earth-Centered Earth-Fixed (ECEF) coordinates
   of a point on the reference ellipsoid.
2. `SphericalVector`: the position of a point on the fixed-radius
   navigation sphere used by the great-circle routines.

Both share the same shape, so they are separate types. The conversion
functions in `geospatial.coordinate_models` accept only the frame they
produce, and arithmetic between the two frames is refused.

Frame axes
----------
- Origin at Earth's center
- X-axis through the prime meridian (0° longitude) at equator
- Y-axis through 90°E at equator
- Z-axis through the North Pole
"""

from dataclasses import dataclass
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from common.exceptions import DomainInputError

V = TypeVar("V", bound="CartesianVector")


@dataclass(frozen=True)
class CartesianVector:
    """A 3D vector in meters.

    Attributes
    ----------
    x, y, z : float
        Components in meters.
    """
    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_array(cls: type[V], array: NDArray[np.float64]) -> V:
        """Build a vector from a length-3 array."""
        return cls(float(array[0]), float(array[1]), float(array[2]))

    def as_array(self) -> NDArray[np.float64]:
        """Return the components as a numpy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def _check_frame(self, other: "CartesianVector") -> None:
        if type(self) is not type(other):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def dot(self, other: "CartesianVector") -> float:
        """Dot product with a vector of the same frame."""
        self._check_frame(other)
        return float(np.dot(self.as_array(), other.as_array()))

    def cross(self: V, other: V) -> V:
        """Cross product with a vector of the same frame."""
        self._check_frame(other)
        return type(self).from_array(np.cross(self.as_array(), other.as_array()))

    def norm(self) -> float:
        """Magnitude of the vector in meters."""
        return float(np.linalg.norm(self.as_array()))

    def normalized(self: V) -> V:
        """Return the unit vector in the same direction.

        Raises
        ------
        DomainInputError
            If the vector has zero length.
        """
        magnitude = self.norm()
        if magnitude == 0.0:
            raise DomainInputError("Cannot normalize a zero-length vector")
        return type(self).from_array(self.as_array() / magnitude)

    def __add__(self: V, other: V) -> V:
        self._check_frame(other)
        return type(self).from_array(self.as_array() + other.as_array())

    def __sub__(self: V, other: V) -> V:
        self._check_frame(other)
        return type(self).from_array(self.as_array() - other.as_array())

    def __mul__(self: V, scalar: float) -> V:
        return type(self).from_array(self.as_array() * float(scalar))

    __rmul__ = __mul__

    def __neg__(self: V) -> V:
        return type(self).from_array(-self.as_array())


class EllipsoidalVector(CartesianVector):
    """ECEF position of a point on the reference ellipsoid."""


class SphericalVector(CartesianVector):
    """Position of a point on the fixed-radius navigation sphere."""
