"""Tests for FrameClock and FrameScheduler."""

import pytest

from scroller.exceptions import ConfigurationError
from scroller.simulation import FrameClock, FrameScheduler


class TestFrameClock:
    def test_first_frame_is_nominal(self) -> None:
        assert FrameClock().advance(12345.0) == 1.0

    def test_nominal_frames(self) -> None:
        clock = FrameClock(frame_ms=10.0)
        clock.advance(0.0)
        assert clock.advance(10.0) == pytest.approx(1.0)
        assert clock.advance(15.0) == pytest.approx(0.5)

    def test_stalled_timestamp_gives_zero(self) -> None:
        clock = FrameClock(frame_ms=10.0)
        clock.advance(100.0)
        assert clock.advance(100.0) == 0.0
        assert clock.advance(90.0) == 0.0
        assert clock.advance(110.0) == pytest.approx(1.0)

    def test_long_gap_clamped(self) -> None:
        clock = FrameClock(frame_ms=10.0, max_frame_delta=3.0)
        clock.advance(0.0)
        assert clock.advance(10_000.0) == 3.0

    def test_reset(self) -> None:
        clock = FrameClock(frame_ms=10.0)
        clock.advance(0.0)
        clock.reset()
        assert clock.advance(500.0) == 1.0

    @pytest.mark.parametrize("kwargs", [{"frame_ms": 0}, {"max_frame_delta": -1}])
    def test_invalid_parameters(self, kwargs) -> None:
        with pytest.raises(ConfigurationError):
            FrameClock(**kwargs)


class TestFrameScheduler:
    def test_delivers_to_all(self) -> None:
        scheduler = FrameScheduler()
        seen = []
        scheduler.register(lambda ts: seen.append(("a", ts)))
        scheduler.register(lambda ts: seen.append(("b", ts)))
        assert scheduler.advance(5.0) == 2
        assert seen == [("a", 5.0), ("b", 5.0)]
        assert scheduler.frames_delivered == 1

    def test_cancel_is_idempotent(self) -> None:
        scheduler = FrameScheduler()
        handle = scheduler.register(lambda ts: None)
        handle.cancel()
        handle.cancel()
        assert not handle.active
        assert scheduler.active_count == 0
        assert scheduler.advance(1.0) == 0

    def test_cancel_during_delivery(self) -> None:
        scheduler = FrameScheduler()
        seen = []
        handles = []
        handles.append(scheduler.register(lambda ts: handles[1].cancel()))
        handles.append(scheduler.register(lambda ts: seen.append(ts)))
        assert scheduler.advance(1.0) == 1
        assert seen == []
