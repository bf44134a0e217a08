"""
Turret preset configuration.

Presets describe a turret's rigid layout and, optionally, the actor transform
it is mounted with. They are stored as JSON:

    {
      "turrets": {
        "tank_cannon": {
          "description": "...",
          "actor_to_joint": [0, 0, 120],
          "joint_to_barrel_start": [40, 0, 15],
          "barrel_start_to_barrel_end": [300, 0, 0],
          "actor_transform": {
            "location": [0, 0, 0],
            "rotation": {"pitch": 0, "yaw": 0, "roll": 0},
            "scale": 1.0
          }
        }
      }
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .aiming import TurretGeometry
from .transform import Rotator, Transform
from .vectors import Vector3D

logger = logging.getLogger(__name__)

DEFAULT_PRESETS_PATH = Path(__file__).parent / "data" / "turrets.json"


@dataclass
class TurretPreset:
    """A named turret layout plus the actor transform it is shown with."""
    name: str
    geometry: TurretGeometry
    actor_transform: Transform = field(default_factory=Transform.identity)
    description: str = ""


@dataclass
class TurretLibrary:
    """All presets from one configuration file, keyed by name."""
    presets: Dict[str, TurretPreset]

    @classmethod
    def from_json(cls, path: str | Path) -> "TurretLibrary":
        """Load presets from a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Turret config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        library = cls.from_dict(data)
        logger.info("Loaded %d turret presets from %s", len(library.presets), config_path)
        return library

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TurretLibrary":
        """Create the library from parsed JSON data."""
        if not isinstance(data, dict):
            raise ValueError("Turret config must be a JSON object")

        turrets = data.get("turrets")
        if not isinstance(turrets, dict) or not turrets:
            raise ValueError("Turret config must have a non-empty 'turrets' table")

        presets = {
            name: _parse_preset(name, preset_data)
            for name, preset_data in turrets.items()
        }
        return cls(presets=presets)

    def names(self) -> List[str]:
        return sorted(self.presets)

    def get(self, name: str) -> TurretPreset:
        """Look up a preset by name."""
        try:
            return self.presets[name]
        except KeyError:
            raise KeyError(
                f"Unknown turret '{name}'. Known turrets: {', '.join(self.names())}"
            ) from None


def load_turret_library(path: Optional[str | Path] = None) -> TurretLibrary:
    """Load a preset file, defaulting to the presets bundled with the package."""
    return TurretLibrary.from_json(path if path is not None else DEFAULT_PRESETS_PATH)


def _to_float(value: Any, what: str) -> float:
    """Convert a JSON number, reporting anything else as a ValueError."""
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be a number, got {value!r}") from None


def parse_vector(value: Any, what: str) -> Vector3D:
    """Parse ``[x, y, z]`` or ``{"x": .., "y": .., "z": ..}`` into a Vector3D."""
    if isinstance(value, dict):
        try:
            components = [value["x"], value["y"], value["z"]]
        except KeyError as e:
            raise ValueError(f"{what} is missing component {e}") from None
        return Vector3D(*(_to_float(v, f"{what}.{axis}") for v, axis in zip(components, "xyz")))
    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise ValueError(f"{what} must have 3 components, got {len(value)}")
        return Vector3D(*(_to_float(v, f"{what}[{i}]") for i, v in enumerate(value)))
    raise ValueError(f"{what} must be a list of 3 numbers or an x/y/z object")


def parse_transform(data: Dict[str, Any], what: str = "actor_transform") -> Transform:
    """Parse an actor transform; missing parts default to identity."""
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object")

    location = None
    if "location" in data:
        location = parse_vector(data["location"], f"{what}.location")

    rotation = None
    if "rotation" in data:
        rotation_data = data["rotation"]
        if not isinstance(rotation_data, dict):
            raise ValueError(f"{what}.rotation must be a pitch/yaw/roll object")
        rotation = Rotator(
            pitch=_to_float(rotation_data.get("pitch", 0.0), f"{what}.rotation.pitch"),
            yaw=_to_float(rotation_data.get("yaw", 0.0), f"{what}.rotation.yaw"),
            roll=_to_float(rotation_data.get("roll", 0.0), f"{what}.rotation.roll"),
        )

    scale = None
    if "scale" in data:
        scale_data = data["scale"]
        if isinstance(scale_data, (int, float)):
            scale = Vector3D(float(scale_data), float(scale_data), float(scale_data))
        else:
            scale = parse_vector(scale_data, f"{what}.scale")

    return Transform.from_components(location=location, rotation=rotation, scale=scale)


def _parse_preset(name: str, data: Dict[str, Any]) -> TurretPreset:
    """Parse a single preset entry."""
    if not isinstance(data, dict):
        raise ValueError(f"Turret '{name}' must be an object")

    for key in ("joint_to_barrel_start", "barrel_start_to_barrel_end"):
        if key not in data:
            raise ValueError(f"Turret '{name}' is missing '{key}'")

    geometry = TurretGeometry(
        actor_to_joint=parse_vector(data.get("actor_to_joint", [0, 0, 0]), f"{name}.actor_to_joint"),
        joint_to_barrel_start=parse_vector(data["joint_to_barrel_start"], f"{name}.joint_to_barrel_start"),
        barrel_start_to_barrel_end=parse_vector(
            data["barrel_start_to_barrel_end"], f"{name}.barrel_start_to_barrel_end"
        ),
    )

    actor_transform = Transform.identity()
    if "actor_transform" in data:
        actor_transform = parse_transform(data["actor_transform"], f"{name}.actor_transform")

    return TurretPreset(
        name=name,
        geometry=geometry,
        actor_transform=actor_transform,
        description=data.get("description", ""),
    )
