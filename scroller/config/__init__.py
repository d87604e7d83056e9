"""Configuration package for the scroller simulation.

Constants live in per-concern modules (display, flyer, runner); the validated
dataclass configs that the engine consumes live in ``game_config``.
"""

from scroller.config.game_config import (
    BodyKind,
    CollisionConfig,
    GameConfig,
    ObstacleConfig,
    ObstacleLayout,
    PhysicsConfig,
    ProgressionConfig,
    ScoringMode,
    SpeedRamp,
    flyer_config,
    runner_config,
)

__all__ = [
    "BodyKind",
    "CollisionConfig",
    "GameConfig",
    "ObstacleConfig",
    "ObstacleLayout",
    "PhysicsConfig",
    "ProgressionConfig",
    "ScoringMode",
    "SpeedRamp",
    "flyer_config",
    "runner_config",
]
