"""State machine abstractions for explicit game phase management.

This module provides a generic state machine where:
- All valid states are enumerated
- Valid transitions are defined explicitly
- Invalid transitions are reported immediately, either as an ``Err`` result
  (``try_transition``) or as an exception (``transition``)
- State history can be tracked for debugging

The game itself moves through three phases:

    IDLE ──start──▶ PLAYING ──collision──▶ GAME_OVER ──restart──▶ PLAYING
      ▲                │                        │
      └────stop────────┘◀───────return──────────┘

Usage:
------
    machine = create_phase_machine()
    machine.try_transition(GamePhase.PLAYING, frame=0, reason="start")
    machine.try_transition(GamePhase.PLAYING)  # Err: PLAYING -> PLAYING
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Generic, List, TypeVar

from scroller.exceptions import InvalidTransitionError
from scroller.result import Err, Ok, Result

# Type variable for state enum types
S = TypeVar("S", bound=Enum)


class GamePhase(Enum):
    """Top-level phase of the game.

    IDLE: no simulation advance, waiting for a start request
    PLAYING: full tick pipeline active
    GAME_OVER: simulation frozen, waiting for a restart request
    """

    IDLE = auto()
    PLAYING = auto()
    GAME_OVER = auto()


# No self-loops: a duplicate start or a second collision is rejected.
GAME_PHASE_TRANSITIONS: Dict[GamePhase, List[GamePhase]] = {
    GamePhase.IDLE: [GamePhase.PLAYING],
    GamePhase.PLAYING: [GamePhase.GAME_OVER, GamePhase.IDLE],
    GamePhase.GAME_OVER: [GamePhase.PLAYING, GamePhase.IDLE],
}


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging.

    Attributes:
        from_state: The state before transition
        to_state: The state after transition
        frame: The simulation frame when transition occurred
        reason: Optional description of why transition happened
    """

    from_state: S
    to_state: S
    frame: int
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation.

    Example:
        class LightState(Enum):
            OFF = auto()
            ON = auto()

        light = StateMachine(LightState.OFF, {
            LightState.OFF: [LightState.ON],
            LightState.ON: [LightState.OFF],
        })
        light.transition(LightState.ON)  # OK
    """

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        """Initialize the state machine.

        Args:
            initial_state: The starting state
            valid_transitions: Map of state -> list of valid target states
            track_history: Whether to record transition history
            max_history: Maximum number of transitions to keep in history
        """
        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )

        self._state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Get transition history (empty if tracking disabled)."""
        return self._history.copy()

    def can_transition(self, target: S) -> bool:
        """Check if transition to target state is valid."""
        return target in self._transitions.get(self._state, [])

    def try_transition(self, target: S, frame: int = 0, reason: str = "") -> Result[S, str]:
        """Attempt to transition to a new state.

        Args:
            target: The desired target state
            frame: The current simulation frame (for history)
            reason: Why this transition is happening (for debugging)

        Returns:
            Ok(new_state) on success, Err(message) if the transition is invalid
        """
        if not self.can_transition(target):
            valid_targets = self._transitions.get(self._state, [])
            return Err(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {[t.name for t in valid_targets]}"
            )

        old_state = self._state
        self._state = target

        if self._track_history:
            self._record_transition(old_state, target, frame, reason)

        return Ok(target)

    def transition(self, target: S, frame: int = 0, reason: str = "") -> S:
        """Transition to a new state, raising on invalid transition.

        Use this when an invalid transition is a programming error. Use
        try_transition() when the transition might legitimately be refused.

        Raises:
            InvalidTransitionError: If the transition is invalid
        """
        result = self.try_transition(target, frame, reason)
        if result.is_err():
            raise InvalidTransitionError(result.error)
        return result.unwrap()

    def _record_transition(self, from_state: S, to_state: S, frame: int, reason: str) -> None:
        self._history.append(
            StateTransition(
                from_state=from_state,
                to_state=to_state,
                frame=frame,
                reason=reason,
            )
        )

        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history :]

    def get_valid_transitions(self) -> List[S]:
        """Get list of valid target states from current state."""
        return list(self._transitions.get(self._state, []))


def create_phase_machine(track_history: bool = True) -> StateMachine[GamePhase]:
    """Create the session's phase machine, starting in IDLE."""
    return StateMachine(GamePhase.IDLE, GAME_PHASE_TRANSITIONS, track_history=track_history)
