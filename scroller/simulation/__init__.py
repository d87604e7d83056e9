"""Simulation package: game state, tick pipeline, engine and replay."""

from scroller.simulation.clock import FrameClock, FrameScheduler, TickHandle
from scroller.simulation.engine import GameEngine
from scroller.simulation.frame_context import FrameContext
from scroller.simulation.pipeline import EnginePipeline, PipelineStep, default_pipeline
from scroller.simulation.replay import RunOutcome, fingerprint_snapshot, run_script
from scroller.simulation.snapshot import FrameSnapshot, ObstacleView, PlayerView, build_snapshot
from scroller.simulation.state import GameState

__all__ = [
    "EnginePipeline",
    "FrameClock",
    "FrameContext",
    "FrameScheduler",
    "FrameSnapshot",
    "GameEngine",
    "GameState",
    "ObstacleView",
    "PipelineStep",
    "PlayerView",
    "RunOutcome",
    "TickHandle",
    "build_snapshot",
    "default_pipeline",
    "fingerprint_snapshot",
    "run_script",
]
