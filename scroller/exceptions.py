"""Scroller exception hierarchy.

Gameplay-level rejections (a jump while airborne, a start request while a
round is already running) are silent no-ops and never raise. Everything
below signals a programming or setup error.
"""


class ScrollerError(Exception):
    """Root of all scroller domain exceptions."""


class ConfigurationError(ScrollerError):
    """Invalid configuration detected at construction time."""


class SimulationError(ScrollerError):
    """Errors during simulation execution (engine, systems, entities)."""


class InvalidTransitionError(SimulationError, ValueError):
    """A strict state machine transition was requested that is not allowed."""
