"""Domain event definitions.

Events are data-only (frozen dataclasses) and carry all context needed for
handlers to process them. Every event records the frame it happened on.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhaseChanged:
    """The game phase machine moved to a new phase.

    Attributes:
        from_phase: Name of the previous phase
        to_phase: Name of the new phase
        reason: Why the transition happened ("start", "collision", ...)
        frame: Frame of the transition
    """

    from_phase: str
    to_phase: str
    reason: str
    frame: int


@dataclass(frozen=True)
class RoundStarted:
    """A fresh round began. ``round_number`` counts rounds in this session."""

    round_number: int
    high_score: int
    frame: int


@dataclass(frozen=True)
class ObstacleSpawned:
    obstacle_id: int
    kind: str
    x: float
    frame: int


@dataclass(frozen=True)
class ObstaclePassed:
    """The player's reference x crossed an obstacle (fires once per obstacle).

    Attributes:
        obstacle_id: The obstacle that was passed
        score: Score after the pass was counted
        frame: Frame of the pass
    """

    obstacle_id: int
    score: int
    frame: int


@dataclass(frozen=True)
class ObstacleCulled:
    obstacle_id: int
    frame: int


@dataclass(frozen=True)
class CollisionDetected:
    """The player hit something; the round is over.

    Attributes:
        obstacle_id: The obstacle that was hit, or None for ground/ceiling
        frame: Frame of the collision
    """

    obstacle_id: int | None
    frame: int


@dataclass(frozen=True)
class RoundEnded:
    """A round was finalized after a collision.

    Attributes:
        score: Final score of the round
        high_score: Session high score after finalization
        new_record: Whether this round raised the high score
        frame: Frame of the collision
    """

    score: int
    high_score: int
    new_record: bool
    frame: int


@dataclass(frozen=True)
class EraChanged:
    """Score crossed an era threshold; ``night`` is the new day/night flag."""

    era: int
    night: bool
    frame: int
