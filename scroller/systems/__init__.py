"""Simulation systems, one per concern of the tick."""

from scroller.systems.base import BaseSystem, SystemResult
from scroller.systems.collision import CollisionSystem, first_hit, intersects, out_of_bounds
from scroller.systems.obstacle_stream import ObstacleStream, SpawnClock
from scroller.systems.physics import PhysicsSystem
from scroller.systems.progression import ProgressionTracker, RoundState

__all__ = [
    "BaseSystem",
    "CollisionSystem",
    "ObstacleStream",
    "PhysicsSystem",
    "ProgressionTracker",
    "RoundState",
    "SpawnClock",
    "SystemResult",
    "first_hit",
    "intersects",
    "out_of_bounds",
]
