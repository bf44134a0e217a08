"""Turret rotation solver for aim joints with an offset barrel."""

from .vectors import (
    SMALL_NUMBER,
    Vector2D,
    Vector3D,
    normalize_safe,
)

from .transform import (
    Quaternion,
    Rotator,
    Transform,
    normalize_axis,
)

from .quadratic import solve_quadratic

from .aiming import (
    # Geometry
    TurretGeometry,
    # Entry points
    calculate_turret_rotation_for_actor,
    calculate_turret_rotation_for_joint,
    # Solvers
    calculate_turret_yaw,
    calculate_turret_pitch,
    # Pitch plane helpers
    nearest_valid_target_location_2d,
    calculate_barrel_ray_distance,
    select_best_ray_distance,
    signed_angle_between,
)

from .refresh import force_construction_refresh

from .config import (
    TurretPreset,
    TurretLibrary,
    load_turret_library,
)

__all__ = [
    # Vectors
    "SMALL_NUMBER",
    "Vector2D",
    "Vector3D",
    "normalize_safe",
    # Transforms
    "Quaternion",
    "Rotator",
    "Transform",
    "normalize_axis",
    # Quadratic
    "solve_quadratic",
    # Aiming - Geometry
    "TurretGeometry",
    # Aiming - Entry points
    "calculate_turret_rotation_for_actor",
    "calculate_turret_rotation_for_joint",
    # Aiming - Solvers
    "calculate_turret_yaw",
    "calculate_turret_pitch",
    # Aiming - Pitch plane helpers
    "nearest_valid_target_location_2d",
    "calculate_barrel_ray_distance",
    "select_best_ray_distance",
    "signed_angle_between",
    # Refresh
    "force_construction_refresh",
    # Config
    "TurretPreset",
    "TurretLibrary",
    "load_turret_library",
]
