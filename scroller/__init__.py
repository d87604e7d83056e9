"""Side-scrolling obstacle-avoidance simulation core.

The package holds the renderer-independent game: player physics, the
obstacle stream, collision detection, scoring and the phase machine. Hosts
drive a ``GameEngine`` with inputs and frame timestamps and draw the
``FrameSnapshot`` it publishes after every tick. Key modules include:

- config: Flyer and runner presets plus validation
- entities: Player body, obstacles and hitboxes
- systems: Physics, obstacle stream, collision and progression
- simulation: Game state, tick pipeline, engine and scripted replay
- autopilot: Scripted players for headless runs

Design note: this module exposes a small, explicit public API via ``__all__``.
"""

from . import config as config
from . import entities as entities
from . import simulation as simulation
from scroller.config import GameConfig, flyer_config, runner_config
from scroller.exceptions import ConfigurationError, InvalidTransitionError, ScrollerError, SimulationError
from scroller.input import InputKind
from scroller.simulation import FrameScheduler, FrameSnapshot, GameEngine, run_script
from scroller.state_machine import GamePhase

__all__ = [
    "ConfigurationError",
    "FrameScheduler",
    "FrameSnapshot",
    "GameConfig",
    "GameEngine",
    "GamePhase",
    "InputKind",
    "InvalidTransitionError",
    "ScrollerError",
    "SimulationError",
    "config",
    "entities",
    "flyer_config",
    "run_script",
    "runner_config",
    "simulation",
]
