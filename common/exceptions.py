"""
Error types raised by the geodesy routines.

Every error is local to the call that raised it and leaves no state behind,
so callers may retry with other input, fall back to the spherical
approximation, or report the problem.
"""

from typing import Optional


class GeodesyError(Exception):
    """Base class for all errors raised by this package."""


class DomainInputError(GeodesyError, ValueError):
    """A numeric input lies outside the domain of the calculation.

    Raised for latitudes outside [-90, 90], non-finite coordinates,
    coincident points that do not define a great circle, and similar
    inputs that would otherwise surface as NaN.
    """


class InvalidZoneLetterError(GeodesyError, ValueError):
    """A UTM zone letter is not one of "CDEFGHJKLMNPQRSTUVWX"."""

    def __init__(self, zone_letter: str):
        self.zone_letter = zone_letter
        super().__init__(f"Invalid UTM zone letter {zone_letter!r}")


class NonConvergenceError(GeodesyError, ArithmeticError):
    """An iterative solver exhausted its iteration bound.

    Attributes
    ----------
    solver : str
        Name of the solver that failed.
    iterations : int
        Number of iterations performed.
    last_change : float
        Magnitude of the last update, in radians (or the solver's own unit).
    """

    def __init__(
        self,
        solver: str,
        iterations: int,
        last_change: Optional[float] = None
    ):
        self.solver = solver
        self.iterations = iterations
        self.last_change = last_change
        message = f"{solver} did not converge after {iterations} iterations"
        if last_change is not None:
            message += f" (last change {last_change:.3e})"
        super().__init__(message)


class ConsistencyCheckError(GeodesyError):
    """A strict-mode consistency check failed."""
