"""Input events and the latched buffer that carries them into the next tick.

Hosts deliver input whenever it happens (key down, key up, pointer press).
Events are queued here and drained in arrival order at the start of the next
tick, so nothing is ever processed in the middle of a tick.
"""

import logging
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class InputKind(Enum):
    """Discrete input events. None of them carries a payload."""

    JUMP = "jump"
    DUCK_START = "duck_start"
    DUCK_END = "duck_end"
    START = "start"  # start from IDLE, restart from GAME_OVER


class InputBuffer:
    """FIFO of pending inputs, consumed once per tick.

    Attributes:
        max_pending: Inputs beyond this count are dropped until the next drain
    """

    def __init__(self, max_pending: int = 64) -> None:
        self._pending: List[InputKind] = []
        self.max_pending = max_pending
        self._dropped = 0

    def push(self, kind: InputKind) -> bool:
        """Queue an input for the next tick.

        Returns:
            False if the buffer was full and the input was dropped
        """
        if not isinstance(kind, InputKind):
            raise TypeError(f"Expected InputKind, got {type(kind).__name__}")
        if len(self._pending) >= self.max_pending:
            self._dropped += 1
            logger.debug("Input buffer full, dropping %s", kind.value)
            return False
        self._pending.append(kind)
        return True

    def drain(self) -> List[InputKind]:
        """Return all pending inputs in arrival order and clear the buffer."""
        pending, self._pending = self._pending, []
        return pending

    def clear(self) -> None:
        self._pending.clear()

    @property
    def dropped(self) -> int:
        return self._dropped

    def __len__(self) -> int:
        return len(self._pending)
