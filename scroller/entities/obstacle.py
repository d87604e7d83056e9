"""Obstacles scrolled toward the player by the obstacle stream."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from scroller.entities.base import Box


class ObstacleKind(Enum):
    GAP = "gap"  # pipe pair with a vertical gap between top_height and top_height + gap
    GROUND = "ground"  # standing on the ground line, must be jumped
    AERIAL = "aerial"  # flying at a fixed height, low ones must be ducked


@dataclass
class Obstacle:
    """A single obstacle.

    ``x`` is the left edge. For GAP obstacles ``y``/``height`` are unused and
    the two boxes are derived from ``top_height``, ``gap`` and ``overhang``.

    Attributes:
        obstacle_id: Identity, unique within a round
        kind: Geometry family
        x: Left edge; decreases every tick
        width: Extent along x
        y: Top edge (GROUND/AERIAL)
        height: Extent along y (GROUND/AERIAL)
        top_height: Bottom of the upper pipe (GAP)
        gap: Vertical opening (GAP)
        overhang: How far the pipes extend past the play field (GAP)
        scored: Flips to True once, when the player passes the obstacle
    """

    obstacle_id: int
    kind: ObstacleKind
    x: float
    width: float
    y: float = 0.0
    height: float = 0.0
    top_height: float = 0.0
    gap: float = 0.0
    overhang: float = 0.0
    scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    def boxes(self) -> List[Box]:
        """Collision boxes at the current position."""
        if self.kind is ObstacleKind.GAP:
            upper = Box(self.x, -self.overhang, self.width, self.top_height + self.overhang)
            lower = Box(self.x, self.top_height + self.gap, self.width, self.overhang)
            return [upper, lower]
        return [Box(self.x, self.y, self.width, self.height)]
