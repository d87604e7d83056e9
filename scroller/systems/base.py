"""Base class for simulation systems.

Each system owns one concern of the tick (physics, obstacles, collision,
progression). Systems hold configuration and injected collaborators (RNG,
event bus) but never the game state itself: the state is handed to
``update()`` by the engine on every tick, so exactly one writer touches it
at a time.

Phase-System Mapping:
---------------------
    @runs_in_phase(UpdatePhase.COLLISION)
    class CollisionSystem(BaseSystem):
        ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from scroller.update_phases import PHASE_DESCRIPTIONS, UpdatePhase

__all__ = [
    "SystemResult",
    "BaseSystem",
]

if TYPE_CHECKING:
    from scroller.events import EventBus
    from scroller.simulation.frame_context import FrameContext
    from scroller.simulation.state import GameState


@dataclass
class SystemResult:
    """Result of a system update.

    Attributes:
        entities_affected: Number of entities that were modified
        entities_spawned: Number of new entities created
        entities_removed: Number of entities removed
        events_emitted: Number of events emitted to the event bus
        skipped: Whether the update was skipped (system disabled)
        details: System-specific details (e.g., {"collided": True})
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    events_emitted: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        return SystemResult(skipped=True)

    @staticmethod
    def empty() -> "SystemResult":
        return SystemResult()


class BaseSystem(ABC):
    """Abstract base class for all simulation systems.

    Subclasses implement ``_do_update()``; ``update()`` handles the enabled
    flag and update counting.
    """

    # Class-level phase declaration (set by @runs_in_phase decorator)
    _phase: Optional[UpdatePhase] = None

    def __init__(self, name: str, event_bus: Optional["EventBus"] = None) -> None:
        """Initialize the system.

        Args:
            name: Human-readable name for this system
            event_bus: Bus for domain events (optional; events are dropped without one)
        """
        self._name = name
        self._event_bus = event_bus
        self._enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def update_count(self) -> int:
        return self._update_count

    @property
    def phase(self) -> Optional[UpdatePhase]:
        return self._phase

    def update(self, state: "GameState", ctx: "FrameContext") -> SystemResult:
        """Perform the system's per-tick logic on ``state``.

        Args:
            state: The game state, exclusively owned for the duration of the tick
            ctx: Per-tick values shared between pipeline steps

        Returns:
            SystemResult describing what the system did
        """
        if not self._enabled:
            return SystemResult.skipped_result()

        result = self._do_update(state, ctx)
        self._update_count += 1
        if result is None:
            return SystemResult.empty()
        return result

    @abstractmethod
    def _do_update(self, state: "GameState", ctx: "FrameContext") -> Optional[SystemResult]:
        """Implement system-specific update logic."""

    def _emit(self, event: object) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(event)

    def get_debug_info(self) -> Dict[str, Any]:
        """Return debug information about this system's state."""
        return {
            "name": self._name,
            "enabled": self._enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
            "phase_description": PHASE_DESCRIPTIONS.get(self._phase, ""),
        }

    def __repr__(self) -> str:
        phase_str = f", phase={self._phase.name}" if self._phase else ""
        return f"{self.__class__.__name__}(name={self._name!r}, enabled={self._enabled}{phase_str})"
