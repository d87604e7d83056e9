"""Progression tracking: score, high score, difficulty speed and eras.

The tracker runs in UpdatePhase.PROGRESSION after collision detection:
- no collision this tick: advance distance, ramp speed, update eras
- collision this tick: finalize the round (commit the high score) once

Passes are reported earlier in the tick by the obstacle stream through
``on_pass()``, so an obstacle passed on the tick of a collision still counts.

Scoring modes:
- PASS: one point per obstacle passed (gap-flyer)
- DISTANCE: distance / distance_per_point, truncated (runner); passes are
  still tracked in ``obstacles_passed``

Eras (day/night) are a pure function of score: ``era = score // threshold``
and night is an odd era. The tracker stores the last era it announced and
only emits EraChanged when the computed era differs, so re-evaluating the
same score on later ticks never flickers.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from scroller.config.game_config import ProgressionConfig, ScoringMode, SpeedRamp
from scroller.entities.obstacle import Obstacle
from scroller.events import EraChanged, EventBus, ObstaclePassed, RoundEnded
from scroller.systems.base import BaseSystem, SystemResult
from scroller.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from scroller.simulation.frame_context import FrameContext
    from scroller.simulation.state import GameState

logger = logging.getLogger(__name__)

# Absorbs float drift when distance is accumulated from fractional dt
_DISTANCE_EPSILON = 1e-9


@dataclass
class RoundState:
    """Score and difficulty for the current round.

    Attributes:
        score: Points this round, never decreases within a round
        high_score: Best finalized score this session, persists across rounds
        speed: Obstacle speed in units per frame
        distance: Distance counter, advanced by dt every Playing tick
        elapsed_ticks: Playing ticks this round
        obstacles_passed: Obstacles passed this round
        era: Last era announced
        night: Day/night flag for the current era
        finalized: Set once the round's high score has been committed
    """

    score: int = 0
    high_score: int = 0
    speed: float = 0.0
    distance: float = 0.0
    elapsed_ticks: int = 0
    obstacles_passed: int = 0
    era: int = 0
    night: bool = False
    finalized: bool = False


@runs_in_phase(UpdatePhase.PROGRESSION)
class ProgressionTracker(BaseSystem):
    """Owns score, high score and the difficulty ramp."""

    def __init__(self, config: ProgressionConfig, event_bus: Optional[EventBus] = None) -> None:
        super().__init__("Progression", event_bus)
        self.config = config
        self._rounds_finalized = 0

    def new_round(self, previous: Optional[RoundState] = None) -> RoundState:
        """Fresh round-scoped fields; the high score carries over."""
        high_score = previous.high_score if previous is not None else 0
        return RoundState(high_score=high_score, speed=self.config.base_speed)

    def _do_update(self, state: "GameState", ctx: "FrameContext") -> SystemResult:
        if ctx.collided:
            new_record = self.finalize(state.round, state.frame)
            return SystemResult(details={"finalized": True, "new_record": new_record})

        self.on_tick(state.round, ctx.dt, state.frame)
        return SystemResult(
            details={"score": state.round.score, "speed": state.round.speed, "era": state.round.era}
        )

    def on_pass(self, round_state: RoundState, obstacle: Obstacle, frame: int = 0) -> bool:
        """Count a passed obstacle exactly once.

        Returns:
            False if the obstacle had already been scored
        """
        if obstacle.scored:
            return False
        obstacle.scored = True
        round_state.obstacles_passed += 1
        if self.config.scoring_mode is ScoringMode.PASS:
            round_state.score += 1
            self._apply_stepped_ramp(round_state)
            self._update_era(round_state, frame)
        self._emit(ObstaclePassed(obstacle.obstacle_id, round_state.score, frame))
        return True

    def on_tick(self, round_state: RoundState, dt: float, frame: int = 0) -> None:
        """Advance distance, continuous speed ramp and distance-derived score."""
        round_state.elapsed_ticks += 1
        round_state.distance += dt

        if self.config.scoring_mode is ScoringMode.DISTANCE:
            score = int(round_state.distance / self.config.distance_per_point + _DISTANCE_EPSILON)
            if score > round_state.score:
                round_state.score = score
                self._apply_stepped_ramp(round_state)
                self._update_era(round_state, frame)

        if self.config.speed_ramp is SpeedRamp.CONTINUOUS:
            round_state.speed = min(
                round_state.speed + self.config.speed_increment * dt, self.config.max_speed
            )

    def _apply_stepped_ramp(self, round_state: RoundState) -> None:
        if self.config.speed_ramp is not SpeedRamp.STEPPED:
            return
        steps = round_state.score // self.config.speed_step_every
        target = min(
            self.config.base_speed + steps * self.config.speed_step, self.config.max_speed
        )
        round_state.speed = max(round_state.speed, target)

    def _update_era(self, round_state: RoundState, frame: int) -> None:
        era = round_state.score // self.config.era_threshold
        if era == round_state.era:
            return
        round_state.era = era
        round_state.night = era % 2 == 1
        logger.info("Era %d reached at score %d (night=%s)", era, round_state.score, round_state.night)
        self._emit(EraChanged(era, round_state.night, frame))

    def finalize(self, round_state: RoundState, frame: int = 0) -> bool:
        """Commit ``high_score = max(high_score, score)`` once per round.

        Returns:
            True if this call raised the high score
        """
        if round_state.finalized:
            return False
        round_state.finalized = True
        self._rounds_finalized += 1

        new_record = round_state.score > round_state.high_score
        if new_record:
            round_state.high_score = round_state.score
        self._emit(RoundEnded(round_state.score, round_state.high_score, new_record, frame))
        return new_record

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "scoring_mode": self.config.scoring_mode.name,
            "speed_ramp": self.config.speed_ramp.name,
            "rounds_finalized": self._rounds_finalized,
        }
