"""Frame clock and tick scheduling.

``FrameClock`` turns the host's monotonically increasing millisecond
timestamps into a per-tick ``dt`` measured in nominal frames.

``FrameScheduler`` stands in for the host's per-frame callback source
(``requestAnimationFrame``, a pygame loop, a test driver). Registering a
callback returns a ``TickHandle``; cancelling the handle deregisters the
callback, and a cancelled handle never fires again even if cancellation
happens while a frame is being delivered.
"""

import logging
from typing import Callable, List, Optional

from scroller.config.display import FRAME_MS, MAX_FRAME_DELTA
from scroller.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameClock:
    """Converts host timestamps (ms) into dt (frames).

    The first timestamp yields one nominal frame. A timestamp that does not
    move forward yields 0. Gaps longer than ``max_frame_delta`` frames are
    clamped.
    """

    def __init__(self, frame_ms: float = FRAME_MS, max_frame_delta: float = MAX_FRAME_DELTA) -> None:
        if frame_ms <= 0:
            raise ConfigurationError(f"frame_ms must be positive, got {frame_ms}")
        if max_frame_delta <= 0:
            raise ConfigurationError(f"max_frame_delta must be positive, got {max_frame_delta}")
        self.frame_ms = frame_ms
        self.max_frame_delta = max_frame_delta
        self._last_timestamp: Optional[float] = None

    def advance(self, timestamp_ms: float) -> float:
        """Record ``timestamp_ms`` and return the elapsed dt in frames."""
        last = self._last_timestamp
        if last is None:
            self._last_timestamp = timestamp_ms
            return 1.0
        if timestamp_ms <= last:
            return 0.0
        self._last_timestamp = timestamp_ms
        dt = (timestamp_ms - last) / self.frame_ms
        if dt > self.max_frame_delta:
            logger.debug("Clamping dt %.2f to %.2f frames", dt, self.max_frame_delta)
            dt = self.max_frame_delta
        return dt

    def reset(self) -> None:
        """Forget the last timestamp; the next advance() yields one nominal frame."""
        self._last_timestamp = None


class TickHandle:
    """Registration of one callback with a FrameScheduler."""

    def __init__(self, scheduler: "FrameScheduler", callback: FrameCallback) -> None:
        self._scheduler = scheduler
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        """Deregister the callback. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        self._scheduler._remove(self)


class FrameScheduler:
    """Delivers one frame at a time to every registered callback."""

    def __init__(self) -> None:
        self._handles: List[TickHandle] = []
        self._frames_delivered = 0

    def register(self, callback: FrameCallback) -> TickHandle:
        handle = TickHandle(self, callback)
        self._handles.append(handle)
        return handle

    def advance(self, timestamp_ms: float) -> int:
        """Deliver one frame to every live callback.

        Returns:
            Number of callbacks invoked
        """
        invoked = 0
        for handle in list(self._handles):
            # A callback earlier in this frame may have cancelled this handle
            if not handle.active:
                continue
            handle.callback(timestamp_ms)
            invoked += 1
        self._frames_delivered += 1
        return invoked

    def _remove(self, handle: TickHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)

    @property
    def active_count(self) -> int:
        return len(self._handles)

    @property
    def frames_delivered(self) -> int:
        return self._frames_delivered
