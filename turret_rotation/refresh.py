"""
Design-time refresh hook.

While a level is being edited, a turret's pose is derived from its target, so
moving the target must make the host recompute the turret's derived
(construction) state. The host supplies how to do that; outside design time
the request is ignored.
"""

from __future__ import annotations

from typing import Any, Callable, Optional


def force_construction_refresh(
    scene_object: Optional[Any],
    is_design_time: Callable[[Any], bool],
    rerun_construction: Callable[[Any], None]
) -> bool:
    """
    Ask the host to rebuild a scene object's derived state.

    Args:
        scene_object: Opaque host object to refresh (None is ignored).
        is_design_time: Returns True if the object lives in an editor context.
        rerun_construction: Recomputes the object's derived state.

    Returns:
        True if a refresh was requested, False if this was a no-op.
    """
    if scene_object is None:
        return False

    if not is_design_time(scene_object):
        return False

    rerun_construction(scene_object)
    return True
