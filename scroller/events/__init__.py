"""Events module for domain event dispatch.

This module provides the EventBus plus typed domain event definitions.
"""

from scroller.events.domain_events import (
    CollisionDetected,
    EraChanged,
    ObstacleCulled,
    ObstaclePassed,
    ObstacleSpawned,
    PhaseChanged,
    RoundEnded,
    RoundStarted,
)
from scroller.events.event_bus import EventBus

__all__ = [
    "CollisionDetected",
    "EraChanged",
    "EventBus",
    "ObstacleCulled",
    "ObstaclePassed",
    "ObstacleSpawned",
    "PhaseChanged",
    "RoundEnded",
    "RoundStarted",
]
