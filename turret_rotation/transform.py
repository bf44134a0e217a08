"""
Rotation and affine transform types for the turret rotation solver.

Implements:
- Quaternion rotations (Hamilton product, conjugate inverse, vector rotation)
- Rotator: pitch/yaw/roll in degrees, the solver's output type
- Transform: scale -> rotate -> translate, with composition, inversion and
  scale extraction

Rotator conventions (X forward, Y right, Z up):
- Yaw turns +X toward +Y about the up axis
- Positive pitch raises the nose (+X toward +Z)
- Roll turns about the forward axis
A rotator applies roll first, then pitch, then yaw.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .vectors import SMALL_NUMBER, Vector3D


# =============================================================================
# CONSTANTS
# =============================================================================

# Above this |singularity| the pitch is pinned at +/-90 deg (gimbal lock)
GIMBAL_LOCK_THRESHOLD = 0.4999995


def normalize_axis(angle_deg: float) -> float:
    """Wrap an angle in degrees into the range (-180, 180]."""
    angle_deg = math.fmod(angle_deg, 360.0)
    if angle_deg < 0.0:
        angle_deg += 360.0
    if angle_deg > 180.0:
        angle_deg -= 360.0
    return angle_deg


# =============================================================================
# QUATERNION
# =============================================================================

@dataclass(frozen=True)
class Quaternion:
    """Unit quaternion rotation (x, y, z imaginary parts, w real part)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __mul__(self, other: Quaternion) -> Quaternion:
        """
        Hamilton product.

        ``a * b`` rotates by ``b`` first, then by ``a``.
        """
        return Quaternion(
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
        )

    def inverse(self) -> Quaternion:
        """Inverse of a unit quaternion (its conjugate)."""
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def rotate_vector(self, v: Vector3D) -> Vector3D:
        """Rotate a vector by this quaternion."""
        q = Vector3D(self.x, self.y, self.z)
        t = q.cross(v) * 2.0
        return v + t * self.w + q.cross(t)

    def rotator(self) -> Rotator:
        """
        Convert to pitch/yaw/roll.

        Near straight up or down the pitch is pinned at +/-90 degrees and the
        roll absorbs the remaining twist.
        """
        singularity_test = self.z * self.x - self.w * self.y
        yaw_y = 2.0 * (self.w * self.z + self.x * self.y)
        yaw_x = 1.0 - 2.0 * (self.y**2 + self.z**2)
        yaw = math.degrees(math.atan2(yaw_y, yaw_x))

        if singularity_test < -GIMBAL_LOCK_THRESHOLD:
            pitch = -90.0
            roll = normalize_axis(-yaw - 2.0 * math.degrees(math.atan2(self.x, self.w)))
        elif singularity_test > GIMBAL_LOCK_THRESHOLD:
            pitch = 90.0
            roll = normalize_axis(yaw - 2.0 * math.degrees(math.atan2(self.x, self.w)))
        else:
            pitch = math.degrees(math.asin(2.0 * singularity_test))
            roll = math.degrees(math.atan2(
                -2.0 * (self.w * self.x + self.y * self.z),
                1.0 - 2.0 * (self.x**2 + self.y**2)
            ))
        return Rotator(pitch=pitch, yaw=yaw, roll=roll)

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)


# =============================================================================
# ROTATOR
# =============================================================================

@dataclass(frozen=True)
class Rotator:
    """
    Rotation as pitch, yaw and roll in degrees.

    Angles are not wrapped; call normalized() when presenting a result.
    """
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def quaternion(self) -> Quaternion:
        """Convert to a quaternion (roll, then pitch, then yaw)."""
        sp, cp = _half_sin_cos(self.pitch)
        sy, cy = _half_sin_cos(self.yaw)
        sr, cr = _half_sin_cos(self.roll)
        return Quaternion(
            x=cr * sp * sy - sr * cp * cy,
            y=-cr * sp * cy - sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
            w=cr * cp * cy + sr * sp * sy,
        )

    def inverse(self) -> Rotator:
        """Rotator that undoes this one."""
        return self.quaternion().inverse().rotator()

    def rotate_vector(self, v: Vector3D) -> Vector3D:
        return self.quaternion().rotate_vector(v)

    def normalized(self) -> Rotator:
        """Copy with every axis wrapped into (-180, 180]."""
        return Rotator(
            pitch=normalize_axis(self.pitch),
            yaw=normalize_axis(self.yaw),
            roll=normalize_axis(self.roll),
        )

    def __repr__(self) -> str:
        return f"Rotator(pitch={self.pitch:.6g}, yaw={self.yaw:.6g}, roll={self.roll:.6g})"


def _half_sin_cos(angle_deg: float) -> tuple[float, float]:
    half = math.radians(angle_deg) * 0.5
    return math.sin(half), math.cos(half)


# =============================================================================
# TRANSFORM
# =============================================================================

@dataclass(frozen=True)
class Transform:
    """
    Affine transform: non-uniform scale, then rotation, then translation.

    Attributes:
        rotation: Rotation applied after scaling
        translation: Offset applied last
        scale: Per-axis scale applied first
    """
    rotation: Quaternion = field(default_factory=Quaternion.identity)
    translation: Vector3D = field(default_factory=Vector3D.zero)
    scale: Vector3D = field(default_factory=Vector3D.one)

    def __mul__(self, other: Transform) -> Transform:
        """
        Compose two transforms.

        ``child * parent`` applies ``child`` first and then ``parent``, so the
        result maps a point in the child's local frame into the parent's
        parent frame.
        """
        return Transform(
            rotation=other.rotation * self.rotation,
            translation=other.rotation.rotate_vector(
                self.translation.scaled_by(other.scale)
            ) + other.translation,
            scale=self.scale.scaled_by(other.scale),
        )

    def transform_position(self, p: Vector3D) -> Vector3D:
        """Map a local point into the parent frame."""
        return self.rotation.rotate_vector(p.scaled_by(self.scale)) + self.translation

    def inverse(self) -> Transform:
        """
        Inverse transform.

        Exact when the scale is one; zero scale components invert to zero.
        """
        inv_rotation = self.rotation.inverse()
        inv_scale = _safe_scale_reciprocal(self.scale)
        inv_translation = inv_rotation.rotate_vector(
            (-self.translation).scaled_by(inv_scale)
        )
        return Transform(
            rotation=inv_rotation,
            translation=inv_translation,
            scale=inv_scale,
        )

    def scale_only(self) -> Transform:
        """Transform with this scale and no rotation or translation."""
        return Transform(scale=self.scale)

    def with_scale(self, scale: Vector3D) -> Transform:
        return replace(self, scale=scale)

    def without_scale(self) -> Transform:
        """Copy with the scale reset to one."""
        return self.with_scale(Vector3D.one())

    @classmethod
    def from_translation(cls, translation: Vector3D) -> Transform:
        return cls(translation=translation)

    @classmethod
    def from_components(
        cls,
        location: Vector3D | None = None,
        rotation: Rotator | None = None,
        scale: Vector3D | None = None,
    ) -> Transform:
        """Build a transform from a location, a rotator and a scale."""
        return cls(
            rotation=(rotation or Rotator()).quaternion(),
            translation=location if location is not None else Vector3D.zero(),
            scale=scale if scale is not None else Vector3D.one(),
        )

    @classmethod
    def identity(cls) -> Transform:
        return cls()


def _safe_scale_reciprocal(scale: Vector3D) -> Vector3D:
    return Vector3D(*(
        0.0 if abs(component) <= SMALL_NUMBER else 1.0 / component
        for component in scale.to_tuple()
    ))
