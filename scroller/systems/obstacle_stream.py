"""Obstacle stream: procedural spawning, scrolling and culling.

This system runs in UpdatePhase.OBSTACLES and, per tick:
1. advances every live obstacle by ``-speed * dt``
2. reports obstacles whose x fell behind the player's reference x to the
   pass handler (the progression tracker), which flips ``scored`` once
3. makes at most one spawn decision if the spawn interval has elapsed
4. culls obstacles that scrolled past the trailing edge

Spawn timing keeps the absolute time of the last spawn decision rather than
a countdown. After any tick, at most one decision is made and the next one
is measured from ``now``, so a long stall never releases a burst of
obstacles on resume.

Geometry is randomized from the injected RNG only:
- GAPS layout: upper pipe height uniform in [min_top_height, max_top_height)
- LANES layout: aerial obstacles (low or high) with ``aerial_chance`` once
  the round's distance passes ``aerial_min_distance``, otherwise a ground
  obstacle with random width and height
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from scroller.config.game_config import GameConfig, ObstacleLayout
from scroller.entities.obstacle import Obstacle, ObstacleKind
from scroller.events import EventBus, ObstacleCulled, ObstacleSpawned
from scroller.systems.base import BaseSystem, SystemResult
from scroller.update_phases import UpdatePhase, runs_in_phase
from scroller.util.rng import RandomSource, random_int, require_rng_param

if TYPE_CHECKING:
    from scroller.simulation.frame_context import FrameContext
    from scroller.simulation.state import GameState
    from scroller.systems.progression import RoundState

logger = logging.getLogger(__name__)

PassHandler = Callable[["RoundState", Obstacle, int], Any]


@dataclass
class SpawnClock:
    """Spawn timing for one round.

    Attributes:
        last_spawn_time: Round time of the last spawn decision
        interval: Time that must elapse after last_spawn_time before the next decision
        next_id: Identity handed to the next obstacle
    """

    last_spawn_time: float = 0.0
    interval: float = 0.0
    next_id: int = 1


@runs_in_phase(UpdatePhase.OBSTACLES)
class ObstacleStream(BaseSystem):
    """Generates, scrolls and culls obstacles for the current round."""

    def __init__(
        self,
        config: GameConfig,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
        pass_handler: Optional[PassHandler] = None,
    ) -> None:
        """Initialize the obstacle stream.

        Args:
            config: Game config; obstacle geometry plus the player's reference x
            rng: Random source for geometry and jitter (required)
            event_bus: Bus for spawn/cull events
            pass_handler: Called with (round_state, obstacle, frame) when an obstacle is passed
        """
        super().__init__("ObstacleStream", event_bus)
        self.config = config.obstacles
        self._base_speed = config.progression.base_speed
        self._player_x = config.physics.player_x
        self._rng = require_rng_param(rng, "ObstacleStream.__init__")
        self._pass_handler = pass_handler
        self._total_spawned = 0

    def new_clock(self, now: float = 0.0, speed: Optional[float] = None) -> SpawnClock:
        """Spawn clock for a fresh round; the first obstacle comes one interval after ``now``."""
        return SpawnClock(last_spawn_time=now, interval=self.next_interval(speed or self._base_speed))

    def _do_update(self, state: "GameState", ctx: "FrameContext") -> SystemResult:
        speed = state.round.speed
        self.advance(state.obstacles, ctx.dt, speed)

        passed = self.detect_passes(state.obstacles)
        for obstacle in passed:
            if self._pass_handler is not None:
                self._pass_handler(state.round, obstacle, state.frame)
        ctx.passed.extend(o.obstacle_id for o in passed)

        spawned = self.maybe_spawn(state, state.now)
        removed = self.cull(state.obstacles, state.frame)

        return SystemResult(
            entities_affected=len(state.obstacles),
            entities_spawned=1 if spawned is not None else 0,
            entities_removed=len(removed),
            details={"passed": len(passed), "live": len(state.obstacles)},
        )

    def advance(self, obstacles: List[Obstacle], dt: float, speed: float) -> None:
        """Move every live obstacle left by ``speed * dt``."""
        step = speed * dt
        for obstacle in obstacles:
            obstacle.x -= step

    def detect_passes(self, obstacles: List[Obstacle]) -> List[Obstacle]:
        """Obstacles behind the player's reference x that have not been scored yet."""
        return [o for o in obstacles if not o.scored and o.x < self._player_x]

    def maybe_spawn(self, state: "GameState", now: float) -> Optional[Obstacle]:
        """Make one spawn decision if the interval has elapsed.

        The decision always restarts the interval from ``now``, even when the
        live cap prevents the spawn itself.
        """
        clock = state.spawn_clock
        if now - clock.last_spawn_time <= clock.interval:
            return None

        clock.last_spawn_time = now
        clock.interval = self.next_interval(state.round.speed)

        if len(state.obstacles) >= self.config.max_live:
            logger.debug("Spawn skipped at frame %d: %d obstacles live", state.frame, len(state.obstacles))
            return None

        obstacle = self._generate(clock.next_id, state.round.distance)
        clock.next_id += 1
        state.obstacles.append(obstacle)
        self._total_spawned += 1

        logger.debug("Spawned %s obstacle #%d at frame %d", obstacle.kind.value, obstacle.obstacle_id, state.frame)
        self._emit(ObstacleSpawned(obstacle.obstacle_id, obstacle.kind.value, obstacle.x, state.frame))
        return obstacle

    def next_interval(self, speed: float) -> float:
        """Time until the next spawn decision at the given speed."""
        interval = self.config.spawn_interval
        if self.config.scale_interval_with_speed:
            interval *= self._base_speed / speed
        if self.config.spawn_jitter > 0:
            jitter = self.config.spawn_jitter
            interval *= 1.0 + self._rng.uniform(-jitter, jitter)
        return interval

    def cull(self, obstacles: List[Obstacle], frame: int = 0) -> List[Obstacle]:
        """Remove obstacles whose right edge has passed the left screen edge."""
        removed = [o for o in obstacles if o.x <= -o.width]
        if removed:
            obstacles[:] = [o for o in obstacles if o.x > -o.width]
            for obstacle in removed:
                self._emit(ObstacleCulled(obstacle.obstacle_id, frame))
        return removed

    def _generate(self, obstacle_id: int, distance: float) -> Obstacle:
        if self.config.layout is ObstacleLayout.GAPS:
            return self._generate_gap(obstacle_id)
        return self._generate_lane(obstacle_id, distance)

    def _generate_gap(self, obstacle_id: int) -> Obstacle:
        cfg = self.config
        top_height = random_int(self._rng, cfg.min_top_height, cfg.max_top_height)
        return Obstacle(
            obstacle_id=obstacle_id,
            kind=ObstacleKind.GAP,
            x=cfg.spawn_x,
            width=cfg.pipe_width,
            top_height=float(top_height),
            gap=cfg.gap,
            overhang=cfg.overhang,
        )

    def _generate_lane(self, obstacle_id: int, distance: float) -> Obstacle:
        cfg = self.config
        # Aerial kinds are gated by distance so the opening stretch is ground-only
        if distance >= cfg.aerial_min_distance and self._rng.random() < cfg.aerial_chance:
            low = self._rng.random() < cfg.aerial_low_chance
            return Obstacle(
                obstacle_id=obstacle_id,
                kind=ObstacleKind.AERIAL,
                x=cfg.spawn_x,
                width=cfg.aerial_width,
                y=cfg.aerial_low_y if low else cfg.aerial_high_y,
                height=cfg.aerial_height,
            )

        width = self._rng.uniform(cfg.ground_min_width, cfg.ground_max_width)
        height = self._rng.uniform(cfg.ground_min_height, cfg.ground_max_height)
        return Obstacle(
            obstacle_id=obstacle_id,
            kind=ObstacleKind.GROUND,
            x=cfg.spawn_x,
            width=width,
            y=cfg.ground_line - height,
            height=height,
        )

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "layout": self.config.layout.name,
            "total_spawned": self._total_spawned,
        }
