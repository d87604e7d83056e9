"""Validated configuration dataclasses for the simulation core.

Each config section pulls its defaults from the per-mode constant modules.
``GameConfig.validate()`` is called by the engine at construction time; a
malformed config raises ``ConfigurationError`` there instead of degrading
during play.
"""

import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from scroller.config import flyer as flyer_defaults
from scroller.config import runner as runner_defaults
from scroller.exceptions import ConfigurationError


class BodyKind(Enum):
    """How the player body reacts to gravity and the jump input."""

    FLYER = auto()  # always falling, flaps at any time, bounded top and bottom
    RUNNER = auto()  # rests on the ground, jumps only from the ground, can duck


class ObstacleLayout(Enum):
    """Geometry family produced by the obstacle stream."""

    GAPS = auto()  # pipe pairs with a vertical gap
    LANES = auto()  # ground obstacles and aerial obstacles


class ScoringMode(Enum):
    """What the score counts."""

    PASS = auto()  # one point per obstacle passed
    DISTANCE = auto()  # distance covered / distance_per_point


class SpeedRamp(Enum):
    """How obstacle speed grows during a round."""

    NONE = auto()
    CONTINUOUS = auto()  # speed += increment * dt
    STEPPED = auto()  # speed += step every N points


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


@dataclass
class PhysicsConfig:
    """Player body geometry and motion constants."""

    body_kind: BodyKind = BodyKind.FLYER
    player_x: float = flyer_defaults.FLYER_PLAYER_X
    start_y: float = flyer_defaults.FLYER_START_Y
    width: float = flyer_defaults.FLYER_WIDTH
    height: float = flyer_defaults.FLYER_HEIGHT
    crouch_height: float = flyer_defaults.FLYER_HEIGHT
    gravity: float = flyer_defaults.GRAVITY
    crouch_gravity: float = flyer_defaults.GRAVITY
    impulse_velocity: float = flyer_defaults.FLAP_FORCE
    # Flyer: valid band for the top edge is [0, floor_y]
    floor_y: float = flyer_defaults.FLOOR_Y
    # Runner: resting top edge of the standing box
    ground_y: float = runner_defaults.GROUND_Y
    tilt_per_velocity: float = flyer_defaults.TILT_PER_VELOCITY
    max_tilt: float = math.pi / 4

    def validate(self) -> None:
        _require(self.width > 0 and self.height > 0, "player width and height must be positive")
        _require(
            0 < self.crouch_height <= self.height,
            f"crouch_height must be in (0, {self.height}], got {self.crouch_height}",
        )
        _require(self.gravity > 0, f"gravity must be positive, got {self.gravity}")
        _require(self.crouch_gravity > 0, f"crouch_gravity must be positive, got {self.crouch_gravity}")
        _require(
            self.impulse_velocity < 0,
            f"impulse_velocity must point up (negative), got {self.impulse_velocity}",
        )
        _require(0 <= self.max_tilt <= math.pi / 2, "max_tilt must be within [0, pi/2]")
        if self.body_kind is BodyKind.FLYER:
            _require(self.floor_y > 0, f"floor_y must be positive, got {self.floor_y}")
            _require(
                0 <= self.start_y <= self.floor_y,
                f"start_y {self.start_y} outside [0, {self.floor_y}]",
            )
        else:
            _require(self.ground_y >= 0, f"ground_y must be non-negative, got {self.ground_y}")


@dataclass
class ObstacleConfig:
    """Spawn cadence and geometry bounds for the obstacle stream."""

    layout: ObstacleLayout = ObstacleLayout.GAPS
    spawn_x: float = flyer_defaults.PIPE_SPAWN_X
    spawn_interval: float = flyer_defaults.PIPE_SPAWN_INTERVAL
    spawn_jitter: float = 0.0
    scale_interval_with_speed: bool = False
    max_live: int = flyer_defaults.MAX_LIVE_PIPES

    # GAPS layout
    pipe_width: float = flyer_defaults.PIPE_WIDTH
    gap: float = flyer_defaults.PIPE_GAP
    min_top_height: int = flyer_defaults.MIN_PIPE_HEIGHT
    max_top_height: int = flyer_defaults.MAX_PIPE_HEIGHT
    overhang: float = flyer_defaults.PIPE_OVERHANG

    # LANES layout
    ground_line: float = runner_defaults.GROUND_LINE
    ground_min_width: float = runner_defaults.GROUND_MIN_WIDTH
    ground_max_width: float = runner_defaults.GROUND_MAX_WIDTH
    ground_min_height: float = runner_defaults.GROUND_MIN_HEIGHT
    ground_max_height: float = runner_defaults.GROUND_MAX_HEIGHT
    aerial_width: float = runner_defaults.AERIAL_WIDTH
    aerial_height: float = runner_defaults.AERIAL_HEIGHT
    aerial_chance: float = runner_defaults.AERIAL_CHANCE
    aerial_min_distance: float = runner_defaults.AERIAL_MIN_DISTANCE
    aerial_low_y: float = runner_defaults.AERIAL_LOW_Y
    aerial_high_y: float = runner_defaults.AERIAL_HIGH_Y
    aerial_low_chance: float = runner_defaults.AERIAL_LOW_CHANCE

    def validate(self) -> None:
        _require(self.spawn_interval > 0, f"spawn_interval must be positive, got {self.spawn_interval}")
        _require(0 <= self.spawn_jitter < 1, f"spawn_jitter must be in [0, 1), got {self.spawn_jitter}")
        _require(self.max_live >= 1, f"max_live must be at least 1, got {self.max_live}")
        if self.layout is ObstacleLayout.GAPS:
            _require(self.pipe_width > 0, "pipe_width must be positive")
            _require(self.gap > 0, "gap must be positive")
            _require(
                0 <= self.min_top_height < self.max_top_height,
                f"inverted top height bounds: [{self.min_top_height}, {self.max_top_height})",
            )
            _require(self.overhang >= 0, "overhang must be non-negative")
        else:
            _require(
                0 < self.ground_min_width <= self.ground_max_width,
                f"inverted ground width bounds: [{self.ground_min_width}, {self.ground_max_width}]",
            )
            _require(
                0 < self.ground_min_height <= self.ground_max_height,
                f"inverted ground height bounds: [{self.ground_min_height}, {self.ground_max_height}]",
            )
            _require(self.aerial_width > 0 and self.aerial_height > 0, "aerial size must be positive")
            _require(0 <= self.aerial_chance <= 1, f"aerial_chance must be in [0, 1], got {self.aerial_chance}")
            _require(
                0 <= self.aerial_low_chance <= 1,
                f"aerial_low_chance must be in [0, 1], got {self.aerial_low_chance}",
            )
            _require(self.aerial_min_distance >= 0, "aerial_min_distance must be non-negative")

    @property
    def min_obstacle_width(self) -> float:
        if self.layout is ObstacleLayout.GAPS:
            return self.pipe_width
        return min(self.ground_min_width, self.aerial_width)

    @property
    def min_obstacle_height(self) -> float:
        if self.layout is ObstacleLayout.GAPS:
            return float(self.min_top_height)
        return min(self.ground_min_height, self.aerial_height)


@dataclass
class CollisionConfig:
    """Hitbox forgiveness applied to both boxes before the overlap test."""

    padding: float = 0.0

    def validate(self) -> None:
        _require(self.padding >= 0, f"padding must be non-negative, got {self.padding}")


@dataclass
class ProgressionConfig:
    """Scoring, difficulty ramp and era (day/night) settings."""

    scoring_mode: ScoringMode = ScoringMode.PASS
    base_speed: float = flyer_defaults.PIPE_SPEED
    max_speed: float = flyer_defaults.MAX_PIPE_SPEED
    speed_ramp: SpeedRamp = SpeedRamp.STEPPED
    speed_increment: float = 0.0
    speed_step: float = flyer_defaults.SPEED_STEP
    speed_step_every: int = flyer_defaults.SPEED_STEP_EVERY
    distance_per_point: float = runner_defaults.DISTANCE_PER_POINT
    era_threshold: int = flyer_defaults.ERA_THRESHOLD

    def validate(self) -> None:
        _require(self.base_speed > 0, f"base_speed must be positive, got {self.base_speed}")
        _require(
            self.max_speed >= self.base_speed,
            f"max_speed {self.max_speed} is below base_speed {self.base_speed}",
        )
        _require(self.speed_increment >= 0, "speed_increment must be non-negative")
        _require(self.speed_step >= 0, "speed_step must be non-negative")
        _require(self.speed_step_every >= 1, "speed_step_every must be at least 1")
        _require(self.distance_per_point > 0, "distance_per_point must be positive")
        _require(self.era_threshold >= 1, f"era_threshold must be at least 1, got {self.era_threshold}")


@dataclass
class GameConfig:
    """Complete configuration for one game mode.

    Attributes:
        name: Mode name used in logs
        tap_to_start: Whether a jump input also starts a round from IDLE/GAME_OVER
    """

    name: str = "flyer"
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    obstacles: ObstacleConfig = field(default_factory=ObstacleConfig)
    collision: CollisionConfig = field(default_factory=CollisionConfig)
    progression: ProgressionConfig = field(default_factory=ProgressionConfig)
    tap_to_start: bool = True

    def validate(self) -> "GameConfig":
        """Validate every section plus cross-section constraints.

        Returns:
            self, so construction sites can chain

        Raises:
            ConfigurationError: On the first violated constraint
        """
        self.physics.validate()
        self.obstacles.validate()
        self.collision.validate()
        self.progression.validate()

        pad = self.collision.padding
        smallest = min(
            self.physics.width,
            self.physics.crouch_height,
            self.obstacles.min_obstacle_width,
            self.obstacles.min_obstacle_height,
        )
        _require(
            2 * pad < smallest,
            f"padding {pad} collapses a {smallest}-unit hitbox",
        )
        return self

    def with_overrides(self, **sections: Any) -> "GameConfig":
        """Return a validated copy with whole sections or top-level fields replaced.

        Example:
            cfg = flyer_config().with_overrides(collision=CollisionConfig(padding=10))
        """
        return dataclasses.replace(self, **sections).validate()


def flyer_config() -> GameConfig:
    """Gap-flyer preset: flap through pipe gaps, one point per pipe."""
    return GameConfig(name="flyer").validate()


def runner_config() -> GameConfig:
    """Run-and-jump preset: jump cacti, duck birds, score by distance."""
    physics = PhysicsConfig(
        body_kind=BodyKind.RUNNER,
        player_x=runner_defaults.RUNNER_PLAYER_X,
        start_y=runner_defaults.GROUND_Y,
        width=runner_defaults.RUNNER_WIDTH,
        height=runner_defaults.RUNNER_HEIGHT,
        crouch_height=runner_defaults.RUNNER_CROUCH_HEIGHT,
        gravity=runner_defaults.GRAVITY,
        crouch_gravity=runner_defaults.CROUCH_GRAVITY,
        impulse_velocity=runner_defaults.JUMP_VELOCITY,
        ground_y=runner_defaults.GROUND_Y,
        tilt_per_velocity=0.0,
    )
    obstacles = ObstacleConfig(
        layout=ObstacleLayout.LANES,
        spawn_x=runner_defaults.SPAWN_X,
        spawn_interval=runner_defaults.SPAWN_INTERVAL,
        spawn_jitter=runner_defaults.SPAWN_JITTER,
        scale_interval_with_speed=True,
        max_live=runner_defaults.MAX_LIVE_OBSTACLES,
    )
    progression = ProgressionConfig(
        scoring_mode=ScoringMode.DISTANCE,
        base_speed=runner_defaults.BASE_SPEED,
        max_speed=runner_defaults.MAX_SPEED,
        speed_ramp=SpeedRamp.CONTINUOUS,
        speed_increment=runner_defaults.SPEED_INCREMENT,
        distance_per_point=runner_defaults.DISTANCE_PER_POINT,
        era_threshold=runner_defaults.ERA_THRESHOLD,
    )
    return GameConfig(
        name="runner",
        physics=physics,
        obstacles=obstacles,
        collision=CollisionConfig(padding=runner_defaults.HITBOX_PADDING),
        progression=progression,
    ).validate()
