"""
Turret aiming for pivots with an offset barrel.

A turret pivots about an aim joint. Its barrel is a rigid segment from
barrel start to barrel end, and it is offset from the joint by a lever arm, so
pointing the joint straight at the target would not make the barrel point at
it. This module finds the joint rotation (pitch, yaw, roll=0) that puts the
target on the barrel's line of fire.

The calculation:
1. Move the target into joint space (rotation/translation only; the actor's
   scale is applied to the barrel offsets instead).
2. Yaw is the target's bearing on the horizontal X-Y plane.
3. De-rotating the target by that yaw puts joint, barrel and target on one
   vertical X-Z plane, where pitch is a 2D problem.
4. On that plane, find the point along the barrel ray that is as far from
   the joint as the target is (a quadratic in the ray distance). Rotating
   the barrel about the joint until that point meets the target gives the
   pitch.

The solver never raises for finite input. Targets too close to the joint are
replaced by the nearest reachable point, and fully degenerate geometry
yields a pitch of 0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from .quadratic import solve_quadratic
from .transform import Rotator, Transform
from .vectors import Vector2D, Vector3D, normalize_safe

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# The minimum reachable distance is padded outwards by
# min(MAX_REACH_TOLERANCE, REACH_TOLERANCE_FRACTION * minimum distance)
MAX_REACH_TOLERANCE = 3.0
REACH_TOLERANCE_FRACTION = 0.01


# =============================================================================
# TURRET GEOMETRY
# =============================================================================

@dataclass
class TurretGeometry:
    """
    Rigid turret layout in the actor's unscaled, unrotated local frame.

    Attributes:
        actor_to_joint: Offset from the actor origin to the aim joint
        joint_to_barrel_start: Offset from the aim joint to the barrel start
        barrel_start_to_barrel_end: Offset along the barrel
    """
    actor_to_joint: Vector3D = field(default_factory=Vector3D.zero)
    joint_to_barrel_start: Vector3D = field(default_factory=Vector3D.zero)
    barrel_start_to_barrel_end: Vector3D = field(default_factory=Vector3D.unit_x)

    def aim_at(self, actor_world_transform: Transform, target_world_location: Vector3D) -> Rotator:
        """Joint rotation, relative to the actor, that aims the barrel at the target."""
        return calculate_turret_rotation_for_actor(
            actor_world_transform,
            self.actor_to_joint,
            self.joint_to_barrel_start,
            self.barrel_start_to_barrel_end,
            target_world_location,
        )


# =============================================================================
# ENTRY POINTS
# =============================================================================

def calculate_turret_rotation_for_actor(
    actor_world_transform: Transform,
    actor_to_joint: Vector3D,
    joint_to_barrel_start: Vector3D,
    barrel_start_to_barrel_end: Vector3D,
    target_world_location: Vector3D
) -> Rotator:
    """
    Calculate the aim joint rotation for a turret mounted on an actor.

    Args:
        actor_world_transform: The actor's world transform (scale, rotation, translation).
        actor_to_joint: Actor origin to aim joint, in the unscaled, unrotated actor frame.
        joint_to_barrel_start: Aim joint to barrel start, unscaled and unrotated.
        barrel_start_to_barrel_end: Barrel start to barrel end, unscaled and unrotated.
        target_world_location: Target position in world space.

    Returns:
        Rotator(pitch, yaw, roll=0) for the aim joint, relative to the actor.
    """
    # Rotation and translation leave the barrel offsets relative to the joint
    # unchanged, scale does not.
    scale_only = actor_world_transform.scale_only()
    joint_to_barrel_start_scaled = scale_only.transform_position(joint_to_barrel_start)
    barrel_start_to_barrel_end_scaled = scale_only.transform_position(barrel_start_to_barrel_end)

    joint_world_transform = Transform.from_translation(actor_to_joint) * actor_world_transform

    return calculate_turret_rotation_for_joint(
        joint_world_transform,
        joint_to_barrel_start_scaled,
        barrel_start_to_barrel_end_scaled,
        target_world_location,
    )


def calculate_turret_rotation_for_joint(
    joint_world_transform: Transform,
    joint_to_barrel_start: Vector3D,
    barrel_start_to_barrel_end: Vector3D,
    target_world_location: Vector3D
) -> Rotator:
    """
    Calculate the aim joint rotation from the joint's world transform.

    The barrel offsets must already carry the actor's scale. With an actor
    that is rotated or scaled, use calculate_turret_rotation_for_actor()
    instead, which prepares both.

    Args:
        joint_world_transform: The aim joint's world transform.
        joint_to_barrel_start: Aim joint to barrel start, already scaled.
        barrel_start_to_barrel_end: Barrel start to barrel end, already scaled.
        target_world_location: Target position in world space.

    Returns:
        Rotator(pitch, yaw, roll=0) for the aim joint.
    """
    # Only rotation and translation place the target relative to the joint;
    # inverting a non-uniformly scaled transform is not exact.
    world_to_joint = joint_world_transform.without_scale().inverse()

    joint_location = Vector3D.zero()
    barrel_start_location = joint_to_barrel_start
    barrel_end_location = barrel_start_location + barrel_start_to_barrel_end
    target_location = world_to_joint.transform_position(target_world_location)

    yaw = calculate_turret_yaw(joint_location, target_location)

    # Undoing the yaw brings the target onto the turret's X-Z plane.
    align_target_with_turret = Rotator(pitch=0.0, yaw=yaw, roll=0.0).inverse()
    target_aligned = align_target_with_turret.rotate_vector(target_location)

    pitch = calculate_turret_pitch(
        joint_location,
        barrel_start_location,
        barrel_end_location,
        target_aligned,
    )

    return Rotator(pitch=pitch, yaw=yaw, roll=0.0)


# =============================================================================
# YAW AND PITCH
# =============================================================================

def calculate_turret_yaw(joint_location: Vector3D, target_location: Vector3D) -> float:
    """
    Bearing from the joint to the target on the horizontal X-Y plane.

    Returns:
        Yaw in degrees, in [-180, 180]. A target straight above or below the
        joint gives 0.
    """
    joint_to_target = target_location - joint_location
    # atan2 of signed zeros can give +/-180
    if joint_to_target.x == 0.0 and joint_to_target.y == 0.0:
        return 0.0
    return math.degrees(math.atan2(joint_to_target.y, joint_to_target.x))


def calculate_turret_pitch(
    joint_location: Vector3D,
    barrel_start_location: Vector3D,
    barrel_end_location: Vector3D,
    target_location: Vector3D
) -> float:
    """
    Pitch that turns the barrel's line of fire onto the target.

    All four points are assumed to lie on the X-Z plane; only their X and Z
    coordinates are used.

    Returns:
        Signed pitch in degrees; positive raises the barrel. 0 if the
        geometry is degenerate.
    """
    joint_2d = joint_location.xz()
    barrel_start_2d = barrel_start_location.xz()
    barrel_end_2d = barrel_end_location.xz()
    target_2d = nearest_valid_target_location_2d(
        joint_2d, barrel_start_2d, barrel_end_2d, target_location.xz()
    )

    ray_distance = calculate_barrel_ray_distance(
        joint_2d, barrel_start_2d, barrel_end_2d, target_2d
    )
    if ray_distance is None:
        logger.debug(
            "No barrel ray distance for joint=%s barrel=(%s, %s) target=%s, pitch defaults to 0",
            joint_2d, barrel_start_2d, barrel_end_2d, target_2d
        )
        return 0.0

    # The barrel point that sits as far from the joint as the target does
    barrel_ray = normalize_safe(barrel_end_2d - barrel_start_2d)
    scaled_barrel_end = barrel_start_2d + barrel_ray * ray_distance

    joint_to_scaled_barrel_end = scaled_barrel_end - joint_2d
    joint_to_target = target_2d - joint_2d
    return signed_angle_between(joint_to_scaled_barrel_end, joint_to_target)


# =============================================================================
# PITCH PLANE HELPERS
# =============================================================================

def nearest_valid_target_location_2d(
    joint: Vector2D,
    barrel_start: Vector2D,
    barrel_end: Vector2D,
    target: Vector2D
) -> Vector2D:
    """
    Replace a target the barrel cannot reach with the nearest one it can.

    A target closer to the joint than both barrel points cannot lie on the
    barrel's line of fire. Such a target is moved outwards along the joint
    to target direction to just past the nearer barrel point, so the pitch
    still follows the target sensibly.

    Returns:
        ``target`` itself when it is far enough from the joint, otherwise
        the substituted location.
    """
    joint_to_barrel_start_distance = (barrel_start - joint).magnitude
    joint_to_barrel_end_distance = (barrel_end - joint).magnitude

    joint_to_target = target - joint
    joint_to_target_distance = joint_to_target.magnitude

    minimum_distance = min(joint_to_barrel_start_distance, joint_to_barrel_end_distance)
    minimum_distance += min(MAX_REACH_TOLERANCE, REACH_TOLERANCE_FRACTION * minimum_distance)

    if joint_to_target_distance < minimum_distance:
        substitute = joint + normalize_safe(joint_to_target) * minimum_distance
        logger.debug(
            "Target %s is %.6g from the joint, inside minimum reach %.6g; using %s",
            target, joint_to_target_distance, minimum_distance, substitute
        )
        return substitute

    return target


def quadratic_coefficients(
    joint: Vector2D,
    barrel_start: Vector2D,
    barrel_end: Vector2D,
    target: Vector2D
) -> tuple[float, float, float]:
    """
    Coefficients (a, b, c) of the barrel ray distance quadratic.

    With J = joint, S = barrel start, R = unit barrel ray and T = target, the
    point S + R*d is as far from J as T when a*d^2 + b*d + c = 0.
    """
    j, s, t = joint, barrel_start, target
    r = normalize_safe(barrel_end - barrel_start)

    a = r.x**2 + r.y**2
    b = (2 * s.x * r.x - 2 * j.x * r.x) + (2 * s.y * r.y - 2 * j.y * r.y)
    c = (j.x - s.x)**2 + (j.y - s.y)**2 - (t.x - j.x)**2 - (t.y - j.y)**2
    return a, b, c


def calculate_barrel_ray_distance(
    joint: Vector2D,
    barrel_start: Vector2D,
    barrel_end: Vector2D,
    target: Vector2D
) -> Optional[float]:
    """
    Signed distance along the barrel ray to the point level with the target.

    Finds d such that ``|barrel_start + ray * d - joint| == |target - joint|``,
    where ``ray`` is the unit direction from barrel start to barrel end.

    Returns:
        The selected distance (see select_best_ray_distance()), or None if
        the quadratic has no real roots.
    """
    a, b, c = quadratic_coefficients(joint, barrel_start, barrel_end, target)
    roots = solve_quadratic(a, b, c)
    if roots is None:
        return None
    return select_best_ray_distance(*roots)


def select_best_ray_distance(first_distance: float, second_distance: float) -> float:
    """
    Pick the root in front of the barrel start.

    A positive root lies in front of the barrel start and wins over a
    negative one. If both roots lie behind the barrel start, the one closer
    to it (the larger, less negative value) is used. Both cases come down to
    the larger root.
    """
    return max(first_distance, second_distance)


def angle_between_normalized(first: Vector2D, second: Vector2D) -> float:
    """Unsigned angle in radians between two unit (or zero) vectors."""
    cos_angle = max(-1.0, min(1.0, first.dot(second)))
    return math.acos(cos_angle)


def should_turn_counter_clockwise(first: Vector2D, second: Vector2D) -> bool:
    """True if the shorter turn from ``first`` to ``second`` is counter-clockwise."""
    first_perp = first.rotated(90)
    return first_perp.dot(second) >= 0


def signed_angle_between(first: Vector2D, second: Vector2D) -> float:
    """
    Angle in degrees to rotate ``first`` onto ``second``.

    Positive means counter-clockwise and the magnitude is in [0, 180]. A
    zero length vector normalizes to zero, so the dot product is 0 and the
    result is 90 rather than NaN.
    """
    first_normalized = normalize_safe(first)
    second_normalized = normalize_safe(second)

    angle_deg = math.degrees(angle_between_normalized(first_normalized, second_normalized))
    sign = 1.0 if should_turn_counter_clockwise(first_normalized, second_normalized) else -1.0
    return sign * angle_deg
