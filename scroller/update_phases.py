"""Update phase definitions for explicit execution ordering.

One tick runs these phases in order. Systems declare the phase they belong
to with ``@runs_in_phase``; the engine pipeline executes the phases in the
order listed here, so a system's place in the tick is visible in one spot.

    INPUT        drain latched inputs, start/restart rounds, apply impulses
    PHYSICS      integrate the player body (one gravity step)
    OBSTACLES    advance, detect passes, spawn, cull
    COLLISION    test player against bounds and obstacles
    PROGRESSION  distance, speed ramp and eras, or finalize on collision
    FRAME_END    publish the frame snapshot for the host

Usage:
------
    @runs_in_phase(UpdatePhase.COLLISION)
    class CollisionSystem(BaseSystem):
        ...
"""

from enum import Enum, auto
from typing import Callable, Dict

__all__ = [
    "UpdatePhase",
    "PHASE_DESCRIPTIONS",
    "runs_in_phase",
]


class UpdatePhase(Enum):
    """Phases of a simulation tick, in execution order."""

    INPUT = auto()
    PHYSICS = auto()
    OBSTACLES = auto()
    COLLISION = auto()
    PROGRESSION = auto()
    FRAME_END = auto()


# Human-readable descriptions for debugging
PHASE_DESCRIPTIONS: Dict[UpdatePhase, str] = {
    UpdatePhase.INPUT: "Consuming latched inputs",
    UpdatePhase.PHYSICS: "Integrating player body",
    UpdatePhase.OBSTACLES: "Advancing, spawning and culling obstacles",
    UpdatePhase.COLLISION: "Detecting collisions",
    UpdatePhase.PROGRESSION: "Updating score, speed and eras",
    UpdatePhase.FRAME_END: "Publishing frame snapshot",
}


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in."""

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator
