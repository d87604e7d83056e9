"""Simulation entities: the player body and the obstacles it avoids."""

from scroller.entities.base import Box
from scroller.entities.obstacle import Obstacle, ObstacleKind
from scroller.entities.player import PlayerBody, Posture

__all__ = [
    "Box",
    "Obstacle",
    "ObstacleKind",
    "PlayerBody",
    "Posture",
]
