#!/usr/bin/env python3
"""
Calculate the aim joint rotation for a turret preset.

Usage:
    python scripts/aim_turret.py --list
    python scripts/aim_turret.py --turret tank_cannon --target 2000 500 150
    python scripts/aim_turret.py --turret naval_gun --target 9000 4000 0 --json
    python scripts/aim_turret.py --config my_turrets.json --turret sentry --target 100 0 50 --actor-scale 2
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add the project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from turret_rotation.config import DEFAULT_PRESETS_PATH, TurretLibrary
from turret_rotation.transform import Rotator
from turret_rotation.vectors import Vector3D

logger = logging.getLogger("aim_turret")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calculate the aim joint rotation that points a turret's barrel at a target",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/aim_turret.py --list
    python scripts/aim_turret.py --turret tank_cannon --target 2000 500 150
    python scripts/aim_turret.py --turret naval_gun --target 9000 4000 0 --json
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_PRESETS_PATH),
        help="Path to turret presets JSON file (default: bundled presets)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the presets in the config file and exit",
    )
    parser.add_argument(
        "--turret",
        type=str,
        help="Name of the turret preset to aim",
    )
    parser.add_argument(
        "--target",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Target location in world space",
    )

    # Actor transform overrides
    parser.add_argument(
        "--actor-location",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Override the preset's actor location",
    )
    parser.add_argument(
        "--actor-rotation",
        type=float,
        nargs=3,
        metavar=("PITCH", "YAW", "ROLL"),
        help="Override the preset's actor rotation (degrees)",
    )
    parser.add_argument(
        "--actor-scale",
        type=float,
        nargs="+",
        metavar="S",
        help="Override the preset's actor scale (1 value for uniform, or 3)",
    )

    # Output
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.actor_scale is not None and len(args.actor_scale) not in (1, 3):
        parser.error("--actor-scale takes 1 or 3 values")

    try:
        library = TurretLibrary.from_json(args.config)
    except (FileNotFoundError, ValueError, json.JSONDecodeError) as e:
        print(f"Error loading turret config: {e}", file=sys.stderr)
        return 1

    if args.list:
        for name in library.names():
            preset = library.get(name)
            print(f"{name:20s} {preset.description}")
        return 0

    if args.turret is None or args.target is None:
        parser.error("--turret and --target are required unless --list is given")

    try:
        preset = library.get(args.turret)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    actor_transform = preset.actor_transform
    if args.actor_location is not None:
        actor_transform = replace(actor_transform, translation=Vector3D(*args.actor_location))
    if args.actor_rotation is not None:
        actor_transform = replace(actor_transform, rotation=Rotator(*args.actor_rotation).quaternion())
    if args.actor_scale is not None:
        scale = args.actor_scale * 3 if len(args.actor_scale) == 1 else args.actor_scale
        actor_transform = actor_transform.with_scale(Vector3D(*scale))

    target = Vector3D(*args.target)
    rotation = preset.geometry.aim_at(actor_transform, target)
    logger.debug("Raw rotation for %s: %r", preset.name, rotation)

    result = rotation.normalized()
    if args.json:
        print(json.dumps({
            "turret": preset.name,
            "target": list(target.to_tuple()),
            "pitch": result.pitch,
            "yaw": result.yaw,
            "roll": result.roll,
        }, indent=2))
    else:
        print(f"Turret: {preset.name}")
        print(f"Target: ({target.x:.3f}, {target.y:.3f}, {target.z:.3f})")
        print(f"Pitch:  {result.pitch:9.4f} deg")
        print(f"Yaw:    {result.yaw:9.4f} deg")
        print(f"Roll:   {result.roll:9.4f} deg")
    return 0


if __name__ == "__main__":
    sys.exit(main())
