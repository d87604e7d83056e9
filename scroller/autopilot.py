"""Scripted players for headless runs.

An autopilot looks at the latest ``FrameSnapshot`` and returns the inputs
to push before the next tick. It never reads engine internals, so it plays
through the same interface a human host does.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from scroller.config.game_config import BodyKind, GameConfig
from scroller.input import InputKind
from scroller.simulation.snapshot import FrameSnapshot, ObstacleView

Box = Tuple[float, float, float, float]


def _next_obstacle(snapshot: FrameSnapshot) -> Optional[ObstacleView]:
    """The nearest obstacle whose right edge is still ahead of the player's left edge."""
    left = snapshot.player.x
    ahead = [o for o in snapshot.obstacles if o.x + o.width > left]
    if not ahead:
        return None
    return min(ahead, key=lambda o: o.x)


class Autopilot(ABC):
    """Base autopilot: restarts finished rounds when ``auto_restart`` is set."""

    def __init__(self, config: GameConfig, auto_restart: bool = True) -> None:
        self.config = config
        self.auto_restart = auto_restart
        self.decisions = 0

    def decide(self, snapshot: FrameSnapshot) -> List[InputKind]:
        if snapshot.phase != "PLAYING":
            return [InputKind.START] if self.auto_restart else []
        inputs = self._decide_playing(snapshot)
        self.decisions += len(inputs)
        return inputs

    @abstractmethod
    def _decide_playing(self, snapshot: FrameSnapshot) -> List[InputKind]:
        """Inputs to push during PLAYING."""


class FlyerAutopilot(Autopilot):
    """Flaps whenever the bird sinks below a target line inside the next gap.

    The target line sits ``margin`` above the gap's lower edge. A flap lifts
    the bird well clear of that line but not as far as the upper pipe, so
    flapping only while falling keeps it threading gaps.
    """

    def __init__(self, config: GameConfig, auto_restart: bool = True, margin: float = 20.0) -> None:
        super().__init__(config, auto_restart)
        self.margin = margin

    def _target_line(self, snapshot: FrameSnapshot) -> float:
        obstacle = _next_obstacle(snapshot)
        if obstacle is None or len(obstacle.boxes) < 2:
            return self.config.physics.start_y + self.config.physics.height
        lower = obstacle.boxes[1]
        return lower[1] - self.margin

    def _decide_playing(self, snapshot: FrameSnapshot) -> List[InputKind]:
        player = snapshot.player
        bottom = player.y + player.height
        if bottom >= self._target_line(snapshot) and player.vertical_velocity >= 0:
            return [InputKind.JUMP]
        return []


class RunnerAutopilot(Autopilot):
    """Jumps ground obstacles and ducks under low aerial ones.

    It reacts once the next obstacle is within ``reaction_frames`` of travel
    at the current speed.
    """

    def __init__(
        self, config: GameConfig, auto_restart: bool = True, reaction_frames: float = 8.0
    ) -> None:
        super().__init__(config, auto_restart)
        self.reaction_frames = reaction_frames
        self._ducking = False

    def _standing_top(self) -> float:
        return self.config.physics.ground_y

    def _is_high(self, box: Box) -> bool:
        # Passes over a standing player
        _, top, _, height = box
        return top + height <= self._standing_top()

    def _decide_playing(self, snapshot: FrameSnapshot) -> List[InputKind]:
        player = snapshot.player
        obstacle = _next_obstacle(snapshot)

        threat = None
        if obstacle is not None:
            gap = obstacle.x - (player.x + player.width)
            if gap <= snapshot.speed * self.reaction_frames:
                threat = obstacle

        inputs: List[InputKind] = []
        wants_duck = (
            threat is not None and threat.kind == "aerial" and not self._is_high(threat.boxes[0])
        )

        if wants_duck and not self._ducking and not player.airborne:
            inputs.append(InputKind.DUCK_START)
            self._ducking = True
        elif not wants_duck and self._ducking:
            inputs.append(InputKind.DUCK_END)
            self._ducking = False

        if threat is not None and threat.kind == "ground" and not player.airborne and not self._ducking:
            inputs.append(InputKind.JUMP)

        return inputs

    def decide(self, snapshot: FrameSnapshot) -> List[InputKind]:
        if snapshot.phase != "PLAYING":
            self._ducking = False
        return super().decide(snapshot)


def create_autopilot(config: GameConfig, auto_restart: bool = True) -> Autopilot:
    """The autopilot matching the config's body kind."""
    if config.physics.body_kind is BodyKind.FLYER:
        return FlyerAutopilot(config, auto_restart)
    return RunnerAutopilot(config, auto_restart)
