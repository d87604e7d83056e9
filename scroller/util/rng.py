"""RNG utilities for deterministic simulation.

The engine never touches the module-level ``random`` functions. Every
randomized decision draws from an injected source so a seeded
``random.Random`` reproduces a run exactly.
"""

import random
from typing import Optional, Protocol, runtime_checkable

from scroller.exceptions import ScrollerError


class MissingRNGError(ScrollerError, RuntimeError):
    """Raised when an RNG is required but not available.

    This error indicates a bug in the simulation setup - systems that
    randomize must be handed the engine's RNG explicitly.
    """


@runtime_checkable
class RandomSource(Protocol):
    """The slice of ``random.Random`` the simulation relies on.

    ``random()`` must return uniform floats in [0, 1). ``uniform`` is used for
    jittered intervals and sizes.
    """

    def random(self) -> float:
        ...

    def uniform(self, a: float, b: float) -> float:
        ...


def create_rng(seed: Optional[int] = None) -> random.Random:
    """Create a dedicated RNG; seeded when ``seed`` is given."""
    return random.Random(seed)


def require_rng_param(rng: Optional[RandomSource], context: str) -> RandomSource:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Use this in constructors that require an RNG to be passed in, instead of
    silently creating an unseeded fallback.

    Raises:
        MissingRNGError: If rng is None

    Example:
        def __init__(self, rng: Optional[RandomSource] = None):
            self._rng = require_rng_param(rng, "ObstacleStream.__init__")
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the engine RNG explicitly.")
    return rng


def random_int(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in [low, high) drawn from a single ``random()`` call."""
    return int(rng.random() * (high - low)) + low
