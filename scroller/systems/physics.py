"""Player physics system.

Impulses (jump, duck) are applied while the engine drains the input buffer
at the start of a tick; integration runs once per Playing tick in
UpdatePhase.PHYSICS. However many inputs arrive in one tick, the body gets
exactly one gravity step.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from scroller.entities.player import PlayerBody
from scroller.events import EventBus
from scroller.input import InputKind
from scroller.systems.base import BaseSystem, SystemResult
from scroller.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from scroller.simulation.frame_context import FrameContext
    from scroller.simulation.state import GameState

logger = logging.getLogger(__name__)

IMPULSE_INPUTS = frozenset({InputKind.JUMP, InputKind.DUCK_START, InputKind.DUCK_END})


@runs_in_phase(UpdatePhase.PHYSICS)
class PhysicsSystem(BaseSystem):
    """Applies impulses and integrates the player body."""

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        super().__init__("Physics", event_bus)
        self._rejected_impulses = 0

    def apply_impulses(self, player: PlayerBody, inputs: Iterable[InputKind]) -> int:
        """Apply impulse inputs in arrival order.

        Rejected impulses (jump while airborne, duck in the air, ...) are
        dropped, not buffered for a later tick.

        Returns:
            Number of impulses that changed the body
        """
        applied = 0
        for kind in inputs:
            if kind not in IMPULSE_INPUTS:
                continue
            if player.apply_impulse(kind):
                applied += 1
            else:
                self._rejected_impulses += 1
                logger.debug("Ignored %s: %r", kind.value, player)
        return applied

    def _do_update(self, state: "GameState", ctx: "FrameContext") -> SystemResult:
        state.player.integrate(ctx.dt)
        return SystemResult(
            entities_affected=1,
            details={"y": state.player.position.y, "airborne": state.player.airborne},
        )

    @property
    def rejected_impulses(self) -> int:
        return self._rejected_impulses
