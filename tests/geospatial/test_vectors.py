"""Unit tests for Cartesian vector types."""

import pytest

from common.exceptions import DomainInputError
from geospatial.vectors import CartesianVector, EllipsoidalVector, SphericalVector


class TestCartesianVector:
    """Test suite for vector arithmetic."""

    def test_dot_and_norm(self):
        """Test dot product and magnitude."""
        v = SphericalVector(3.0, 4.0, 0.0)
        assert v.norm() == pytest.approx(5.0)
        assert v.dot(SphericalVector(1.0, 1.0, 1.0)) == pytest.approx(7.0)

    def test_cross_follows_right_hand_rule(self):
        """Test that x × y = z and the frame type is kept."""
        result = SphericalVector(1, 0, 0).cross(SphericalVector(0, 1, 0))
        assert isinstance(result, SphericalVector)
        assert (result.x, result.y, result.z) == (0.0, 0.0, 1.0)

    def test_normalized(self):
        """Test unit vector computation."""
        unit = EllipsoidalVector(0.0, 0.0, 6356752.314245).normalized()
        assert isinstance(unit, EllipsoidalVector)
        assert unit.z == pytest.approx(1.0)
        assert unit.norm() == pytest.approx(1.0)

    def test_normalize_zero_vector_raises(self):
        """Test that a zero vector cannot be normalized."""
        with pytest.raises(DomainInputError):
            SphericalVector(0.0, 0.0, 0.0).normalized()

    def test_arithmetic_operators(self):
        """Test addition, subtraction, scaling and negation."""
        a = EllipsoidalVector(1.0, 2.0, 3.0)
        b = EllipsoidalVector(0.5, 0.5, 0.5)

        assert (a + b).as_array().tolist() == [1.5, 2.5, 3.5]
        assert (a - b).as_array().tolist() == [0.5, 1.5, 2.5]
        assert (2 * a).as_array().tolist() == [2.0, 4.0, 6.0]
        assert (a * 2).as_array().tolist() == [2.0, 4.0, 6.0]
        assert (-a).as_array().tolist() == [-1.0, -2.0, -3.0]
        assert isinstance(2 * a, EllipsoidalVector)

    @pytest.mark.parametrize("operation", [
        lambda a, b: a + b,
        lambda a, b: a - b,
        lambda a, b: a.dot(b),
        lambda a, b: a.cross(b),
    ])
    def test_frames_do_not_mix(self, operation):
        """Test that ellipsoidal and spherical vectors cannot be combined."""
        with pytest.raises(TypeError):
            operation(EllipsoidalVector(1, 0, 0), SphericalVector(1, 0, 0))

    def test_components_coerced_to_float(self):
        """Test that integer components are stored as floats."""
        v = CartesianVector(1, 2, 3)
        assert isinstance(v.x, float)
