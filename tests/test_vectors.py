"""
Tests for the vector primitives.

Tests cover:
- Vector2D / Vector3D arithmetic and dot/cross products
- Safe normalization of zero and near-zero vectors
- Counter-clockwise 2D rotation by degrees
- Projection onto the X-Z pitch plane
"""

import math
import pytest

from turret_rotation.vectors import (
    SMALL_NUMBER,
    Vector2D,
    Vector3D,
    normalize_safe,
)


# =============================================================================
# VECTOR2D TESTS
# =============================================================================

class TestVector2DOperations:
    """Tests for basic Vector2D arithmetic."""

    @pytest.mark.parametrize("v1,v2,expected", [
        ((1, 2), (3, 4), (4, 6)),
        ((0, 0), (1, 1), (1, 1)),
        ((-1, -2), (1, 2), (0, 0)),
    ])
    def test_addition(self, v1, v2, expected):
        assert Vector2D(*v1) + Vector2D(*v2) == Vector2D(*expected)

    def test_subtraction(self):
        assert Vector2D(5, 7) - Vector2D(4, 5) == Vector2D(1, 2)

    def test_scalar_multiplication_both_sides(self):
        v = Vector2D(1.5, -2.0)
        assert v * 2 == Vector2D(3.0, -4.0)
        assert 2 * v == Vector2D(3.0, -4.0)

    def test_negation(self):
        assert -Vector2D(1, -2) == Vector2D(-1, 2)

    def test_dot(self):
        assert Vector2D(1, 2).dot(Vector2D(3, 4)) == 11

    def test_magnitude(self):
        assert Vector2D(3, 4).magnitude == pytest.approx(5.0)
        assert Vector2D(3, 4).magnitude_squared == pytest.approx(25.0)

    def test_equality_with_other_type_is_false(self):
        assert Vector2D(1, 2) != (1, 2)


class TestVector2DNormalization:
    """Tests for safe normalization in 2D."""

    def test_normalizes_to_unit_length(self):
        result = Vector2D(3, 4).normalized()
        assert result == Vector2D(0.6, 0.8)
        assert result.magnitude == pytest.approx(1.0)

    def test_zero_vector_stays_zero(self):
        result = Vector2D(0, 0).normalized()
        assert result == Vector2D(0, 0)
        assert not math.isnan(result.x)

    def test_near_zero_vector_becomes_zero(self):
        tiny = math.sqrt(SMALL_NUMBER) / 10
        assert Vector2D(tiny, 0).normalized() == Vector2D.zero()

    def test_small_but_valid_vector_is_normalized(self):
        assert Vector2D(1e-3, 0).normalized() == Vector2D(1, 0)

    def test_unit_vector_unchanged(self):
        assert Vector2D(0, 1).normalized() == Vector2D(0, 1)


class TestVector2DRotation:
    """Tests for counter-clockwise rotation by degrees."""

    @pytest.mark.parametrize("start,angle,expected", [
        ((1, 0), 90, (0, 1)),
        ((1, 0), -90, (0, -1)),
        ((0, 1), 90, (-1, 0)),
        ((1, 0), 180, (-1, 0)),
        ((1, 0), 0, (1, 0)),
        ((2, 0), 360, (2, 0)),
    ])
    def test_rotation(self, start, angle, expected):
        assert Vector2D(*start).rotated(angle) == Vector2D(*expected)

    def test_rotation_by_45(self):
        half_sqrt2 = math.sqrt(2) / 2
        assert Vector2D(1, 0).rotated(45) == Vector2D(half_sqrt2, half_sqrt2)

    def test_rotation_preserves_length(self):
        v = Vector2D(3, -7)
        assert v.rotated(123.4).magnitude == pytest.approx(v.magnitude)


# =============================================================================
# VECTOR3D TESTS
# =============================================================================

class TestVector3DOperations:
    """Tests for Vector3D arithmetic."""

    def test_addition_and_subtraction(self):
        a = Vector3D(1, 2, 3)
        b = Vector3D(4, 5, 6)
        assert a + b == Vector3D(5, 7, 9)
        assert b - a == Vector3D(3, 3, 3)

    def test_scalar_multiplication(self):
        assert Vector3D(1, 2, 3) * 2 == Vector3D(2, 4, 6)
        assert 0.5 * Vector3D(2, 4, 6) == Vector3D(1, 2, 3)

    def test_dot_and_cross(self):
        x = Vector3D(1, 0, 0)
        y = Vector3D(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y) == Vector3D(0, 0, 1)
        assert y.cross(x) == Vector3D(0, 0, -1)

    def test_scaled_by_is_componentwise(self):
        assert Vector3D(1, 2, 3).scaled_by(Vector3D(2, 0.5, -1)) == Vector3D(2, 1, -3)

    def test_magnitude(self):
        assert Vector3D(1, 2, 2).magnitude == pytest.approx(3.0)
        assert (Vector3D(1, 1, 1) - Vector3D(2, 3, 3)).magnitude == pytest.approx(3.0)

    def test_xz_projection_drops_y(self):
        assert Vector3D(4, 99, -2).xz() == Vector2D(4, -2)

    def test_tuple_round_trip(self):
        v = Vector3D.from_tuple((1.0, -2.0, 3.5))
        assert v.to_tuple() == (1.0, -2.0, 3.5)

    def test_factories(self):
        assert Vector3D.zero() == Vector3D(0, 0, 0)
        assert Vector3D.one() == Vector3D(1, 1, 1)
        assert Vector3D.unit_x() == Vector3D(1, 0, 0)


class TestNormalizeSafe:
    """Tests for normalize_safe on both vector types."""

    def test_3d_normalization(self):
        assert normalize_safe(Vector3D(0, 0, 5)) == Vector3D(0, 0, 1)

    def test_3d_zero_vector(self):
        assert normalize_safe(Vector3D.zero()) == Vector3D.zero()

    def test_2d_zero_vector(self):
        assert normalize_safe(Vector2D.zero()) == Vector2D.zero()

    def test_does_not_modify_input(self):
        v = Vector3D(3, 0, 4)
        normalize_safe(v)
        assert v == Vector3D(3, 0, 4)
