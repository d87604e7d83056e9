"""Engine pipeline: the ordered steps of one tick.

Steps receive the engine, the game state and a FrameContext for explicit
data flow. The default pipeline follows UpdatePhase order:

    input → physics → obstacles → collision → progression → frame_end

The Playing-only steps check ``ctx.simulate``, which the input step sets
once it has settled the phase for this tick. A custom pipeline can add,
remove or reorder steps without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from collections.abc import Callable

from scroller.simulation.frame_context import FrameContext
from scroller.update_phases import UpdatePhase

if TYPE_CHECKING:
    from scroller.simulation.engine import GameEngine
    from scroller.simulation.state import GameState


@dataclass
class PipelineStep:
    """A single step in the tick pipeline.

    Attributes:
        name: Human-readable identifier for the step
        phase: The update phase this step implements
        fn: Function that executes this step
    """

    name: str
    phase: UpdatePhase
    fn: Callable[[GameEngine, GameState, FrameContext], None]


class EnginePipeline:
    """Ordered sequence of steps executed once per tick."""

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    @property
    def steps(self) -> list[PipelineStep]:
        return self._steps

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    def run(self, engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
        """Execute all steps in order against ``state``."""
        for step in self._steps:
            step.fn(engine, state, ctx)


# =============================================================================
# Default pipeline
# =============================================================================


def _step_input(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """INPUT: count the frame, route latched inputs, decide whether to simulate."""
    engine.process_inputs(state, ctx)


def _step_physics(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """PHYSICS: one integration step for the player body."""
    if ctx.simulate:
        engine.physics.update(state, ctx)


def _step_obstacles(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """OBSTACLES: advance, score passes, spawn, cull."""
    if ctx.simulate:
        engine.obstacle_stream.update(state, ctx)


def _step_collision(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """COLLISION: bounds and obstacle overlap."""
    if ctx.simulate:
        engine.collision.update(state, ctx)


def _step_progression(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """PROGRESSION: ramp difficulty, or finalize and end the round on collision."""
    if not ctx.simulate:
        return
    engine.progression.update(state, ctx)
    if ctx.collided:
        engine.end_round(state, ctx)


def _step_frame_end(engine: GameEngine, state: GameState, ctx: FrameContext) -> None:
    """FRAME_END: publish the snapshot for the host."""
    engine.publish_snapshot(state)


def default_pipeline() -> EnginePipeline:
    """The canonical tick order."""
    return EnginePipeline(
        [
            PipelineStep("input", UpdatePhase.INPUT, _step_input),
            PipelineStep("physics", UpdatePhase.PHYSICS, _step_physics),
            PipelineStep("obstacles", UpdatePhase.OBSTACLES, _step_obstacles),
            PipelineStep("collision", UpdatePhase.COLLISION, _step_collision),
            PipelineStep("progression", UpdatePhase.PROGRESSION, _step_progression),
            PipelineStep("frame_end", UpdatePhase.FRAME_END, _step_frame_end),
        ]
    )
