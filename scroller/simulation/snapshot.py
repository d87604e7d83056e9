"""Immutable per-tick view of the game for hosts.

Hosts never read ``GameState`` directly; after every tick the engine builds
a ``FrameSnapshot`` that a renderer can project onto the screen.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from scroller.entities.obstacle import Obstacle
from scroller.entities.player import PlayerBody
from scroller.simulation.state import GameState


@dataclass(frozen=True)
class PlayerView:
    """Player geometry; x/y/width/height describe the effective hitbox."""

    x: float
    y: float
    width: float
    height: float
    vertical_velocity: float
    posture: str
    airborne: bool
    rotation: float


@dataclass(frozen=True)
class ObstacleView:
    """Obstacle geometry; ``boxes`` are (left, top, width, height) tuples."""

    obstacle_id: int
    kind: str
    x: float
    width: float
    boxes: tuple[tuple[float, float, float, float], ...]
    scored: bool


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a host needs to draw one frame."""

    phase: str
    frame: int
    round_number: int
    player: PlayerView
    obstacles: tuple[ObstacleView, ...]
    score: int
    high_score: int
    obstacles_passed: int
    speed: float
    distance: float
    era: int
    night: bool

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible mapping (tuples become lists)."""
        return asdict(self)


def _player_view(player: PlayerBody) -> PlayerView:
    box = player.effective_box()
    return PlayerView(
        x=box.left,
        y=box.top,
        width=box.width,
        height=box.height,
        vertical_velocity=player.vertical_velocity,
        posture=player.posture.value,
        airborne=player.airborne,
        rotation=player.rotation,
    )


def _obstacle_view(obstacle: Obstacle) -> ObstacleView:
    return ObstacleView(
        obstacle_id=obstacle.obstacle_id,
        kind=obstacle.kind.value,
        x=obstacle.x,
        width=obstacle.width,
        boxes=tuple(box.as_tuple() for box in obstacle.boxes()),
        scored=obstacle.scored,
    )


def build_snapshot(state: GameState) -> FrameSnapshot:
    """Capture the current state as an immutable snapshot."""
    rnd = state.round
    return FrameSnapshot(
        phase=state.phase.name,
        frame=state.frame,
        round_number=state.round_number,
        player=_player_view(state.player),
        obstacles=tuple(_obstacle_view(o) for o in state.obstacles),
        score=rnd.score,
        high_score=rnd.high_score,
        obstacles_passed=rnd.obstacles_passed,
        speed=rnd.speed,
        distance=rnd.distance,
        era=rnd.era,
        night=rnd.night,
    )
