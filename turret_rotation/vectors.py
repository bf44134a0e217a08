"""
Vector primitives for the turret rotation solver.

Implements the small amount of 2D/3D vector math the solver needs:
- 3D vectors for positions and offsets in actor, joint and world space
- 2D vectors for the vertical pitch plane
- Safe normalization that returns the zero vector for near-zero input
- Counter-clockwise 2D rotation by an angle in degrees

Coordinate system: X forward, Y right, Z up. The horizontal plane is X-Y and
pitch is measured on the X-Z plane.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# =============================================================================
# CONSTANTS
# =============================================================================

# Squared-length threshold below which a vector counts as zero length
SMALL_NUMBER = 1e-8

# Tolerance used by the approximate equality checks
VECTOR_EQUALITY_EPSILON = 1e-10


# =============================================================================
# VECTOR2D CLASS
# =============================================================================

@dataclass
class Vector2D:
    """
    2D vector on the turret's vertical plane.

    After the target has been de-rotated by the yaw, ``x`` is the horizontal
    (forward) coordinate and ``y`` holds the height.
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        """Equality check with tolerance."""
        if not isinstance(other, Vector2D):
            return False
        return (abs(self.x - other.x) < VECTOR_EQUALITY_EPSILON and
                abs(self.y - other.y) < VECTOR_EQUALITY_EPSILON)

    def dot(self, other: Vector2D) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2)

    @property
    def magnitude_squared(self) -> float:
        return self.x**2 + self.y**2

    def normalized(self) -> Vector2D:
        """
        Return the unit vector in the same direction.

        Vectors whose squared length is below SMALL_NUMBER come back as the
        zero vector instead of dividing by (almost) zero.
        """
        square_sum = self.magnitude_squared
        if square_sum == 1.0:
            return Vector2D(self.x, self.y)
        if square_sum < SMALL_NUMBER:
            return Vector2D.zero()
        scale = 1.0 / math.sqrt(square_sum)
        return Vector2D(self.x * scale, self.y * scale)

    def rotated(self, angle_deg: float) -> Vector2D:
        """
        Rotate counter-clockwise by ``angle_deg`` degrees.

        Args:
            angle_deg: Rotation angle in degrees (negative turns clockwise)

        Returns:
            The rotated vector
        """
        angle_rad = math.radians(angle_deg)
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector2D(
            cos_a * self.x - sin_a * self.y,
            sin_a * self.x + cos_a * self.y
        )

    @classmethod
    def zero(cls) -> Vector2D:
        return cls(0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.6g}, {self.y:.6g})"


# =============================================================================
# VECTOR3D CLASS
# =============================================================================

@dataclass
class Vector3D:
    """
    3D vector for positions, offsets, and directions.

    Whether a value is a point or a free direction, and which frame it is in
    (actor, joint or world), is tracked by the caller, not by the type.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3D) -> Vector3D:
        """Vector addition."""
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        """Vector subtraction."""
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3D:
        """Scalar multiplication."""
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3D:
        """Right scalar multiplication."""
        return self.__mul__(scalar)

    def __neg__(self) -> Vector3D:
        """Negation."""
        return Vector3D(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        """Equality check with tolerance."""
        if not isinstance(other, Vector3D):
            return False
        eps = VECTOR_EQUALITY_EPSILON
        return (abs(self.x - other.x) < eps and
                abs(self.y - other.y) < eps and
                abs(self.z - other.z) < eps)

    def dot(self, other: Vector3D) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        """Cross product."""
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def scaled_by(self, other: Vector3D) -> Vector3D:
        """Componentwise product, used to apply a non-uniform scale."""
        return Vector3D(self.x * other.x, self.y * other.y, self.z * other.z)

    @property
    def magnitude(self) -> float:
        """Vector magnitude (length)."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    @property
    def magnitude_squared(self) -> float:
        """Squared magnitude (avoids sqrt for comparisons)."""
        return self.x**2 + self.y**2 + self.z**2

    def normalized(self) -> Vector3D:
        """Return unit vector in same direction, or zero for near-zero input."""
        square_sum = self.magnitude_squared
        if square_sum == 1.0:
            return Vector3D(self.x, self.y, self.z)
        if square_sum < SMALL_NUMBER:
            return Vector3D.zero()
        scale = 1.0 / math.sqrt(square_sum)
        return Vector3D(self.x * scale, self.y * scale, self.z * scale)

    def xz(self) -> Vector2D:
        """Project onto the vertical X-Z plane."""
        return Vector2D(self.x, self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to tuple."""
        return (self.x, self.y, self.z)

    @classmethod
    def from_tuple(cls, t: tuple[float, float, float]) -> Vector3D:
        """Create from tuple."""
        return cls(t[0], t[1], t[2])

    @classmethod
    def zero(cls) -> Vector3D:
        """Zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> Vector3D:
        """Unit scale."""
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def unit_x(cls) -> Vector3D:
        """Unit vector in X direction (forward)."""
        return cls(1.0, 0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vector3D({self.x:.6g}, {self.y:.6g}, {self.z:.6g})"


def normalize_safe(v: Vector2D | Vector3D) -> Vector2D | Vector3D:
    """Safe-normalize a 2D or 3D vector (zero vector in, zero vector out)."""
    return v.normalized()
