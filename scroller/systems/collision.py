"""Collision detection between the player and the world.

Detection runs purely over the simulation's logical geometry; nothing here
asks a renderer where things were drawn.

Algorithm:
- Both the player's effective box (shorter when crouched) and every
  obstacle box are shrunk by ``padding`` on all four edges to forgive the
  whitespace around sprites.
- Overlap is strict on every axis (``a.right > b.left and a.left < b.right``),
  so boxes that only touch along an edge do not collide.
- Gap obstacles contribute two boxes (above and below the gap); hitting
  either ends the round.
- The flyer's ground/ceiling check is separate: the body records when its
  unclamped position left [0, floor_y] during integration.

Any hit is terminal for the round regardless of obstacle kind.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from scroller.entities.obstacle import Obstacle
from scroller.entities.player import PlayerBody
from scroller.events import CollisionDetected, EventBus
from scroller.systems.base import BaseSystem, SystemResult
from scroller.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from scroller.simulation.frame_context import FrameContext
    from scroller.simulation.state import GameState

logger = logging.getLogger(__name__)


def intersects(player: PlayerBody, obstacle: Obstacle, padding: float = 0.0) -> bool:
    """Check whether the player's padded box overlaps any padded obstacle box.

    Pure function: neither argument is modified.
    """
    player_box = player.effective_box().shrink(padding)
    return any(player_box.overlaps(box.shrink(padding)) for box in obstacle.boxes())


def out_of_bounds(player: PlayerBody) -> bool:
    """Ground/ceiling check for bounded bodies (``y < 0 or y > floor_y``)."""
    return player.is_flyer and player.left_bounds


def first_hit(
    player: PlayerBody, obstacles: Iterable[Obstacle], padding: float = 0.0
) -> Optional[Obstacle]:
    """The first obstacle the player intersects, in list order, or None."""
    for obstacle in obstacles:
        if intersects(player, obstacle, padding):
            return obstacle
    return None


@runs_in_phase(UpdatePhase.COLLISION)
class CollisionSystem(BaseSystem):
    """Evaluates collisions once per Playing tick and flags the frame context."""

    def __init__(self, padding: float = 0.0, event_bus: Optional[EventBus] = None) -> None:
        super().__init__("Collision", event_bus)
        self.padding = padding
        self._checks = 0
        self._hits = 0

    def _do_update(self, state: "GameState", ctx: "FrameContext") -> SystemResult:
        if ctx.collided:
            # Already terminal this tick; a second hit must not be reported
            return SystemResult.empty()

        self._checks += 1
        player = state.player

        if out_of_bounds(player):
            self._record_hit(ctx, None, state.frame)
            return SystemResult(entities_affected=1, details={"collided": True, "bounds": True})

        hit = first_hit(player, state.obstacles, self.padding)
        if hit is not None:
            self._record_hit(ctx, hit.obstacle_id, state.frame)
            return SystemResult(
                entities_affected=1, details={"collided": True, "obstacle_id": hit.obstacle_id}
            )

        return SystemResult(details={"collided": False})

    def _record_hit(self, ctx: "FrameContext", obstacle_id: Optional[int], frame: int) -> None:
        self._hits += 1
        ctx.collided = True
        ctx.collision_obstacle_id = obstacle_id
        if obstacle_id is None:
            logger.debug("Player left the play band at frame %d", frame)
        else:
            logger.debug("Player hit obstacle #%d at frame %d", obstacle_id, frame)
        self._emit(CollisionDetected(obstacle_id, frame))

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "padding": self.padding,
            "checks": self._checks,
            "hits": self._hits,
        }
