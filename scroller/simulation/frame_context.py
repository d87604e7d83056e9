"""FrameContext - explicit per-tick state for pipeline steps.

Created at the start of each tick and passed through every step, so values
computed by one step and consumed by another are visible in one place
instead of living on the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scroller.input import InputKind


@dataclass
class FrameContext:
    """Per-tick values shared between pipeline steps.

    Attributes:
        dt: Elapsed time for this tick, in frames
        inputs: Inputs drained from the buffer for this tick, in arrival order
        simulate: Whether the Playing steps run this tick
        round_started: A round began during the input step
        collided: The collision step found a hit
        collision_obstacle_id: Obstacle hit, or None for ground/ceiling
        passed: Obstacles passed this tick
    """

    dt: float = 1.0
    inputs: list[InputKind] = field(default_factory=list)
    simulate: bool = False
    round_started: bool = False
    collided: bool = False
    collision_obstacle_id: Optional[int] = None
    passed: list[int] = field(default_factory=list)
