"""Tests for the latched input buffer."""

import pytest

from scroller.input import InputBuffer, InputKind


def test_drain_preserves_arrival_order() -> None:
    buffer = InputBuffer()
    buffer.push(InputKind.DUCK_START)
    buffer.push(InputKind.JUMP)
    assert buffer.drain() == [InputKind.DUCK_START, InputKind.JUMP]
    assert len(buffer) == 0


def test_full_buffer_drops() -> None:
    buffer = InputBuffer(max_pending=2)
    assert buffer.push(InputKind.JUMP)
    assert buffer.push(InputKind.JUMP)
    assert not buffer.push(InputKind.JUMP)
    assert buffer.dropped == 1


def test_rejects_non_input() -> None:
    with pytest.raises(TypeError):
        InputBuffer().push("jump")


def test_inputs_between_ticks_apply_once(runner_engine) -> None:
    runner_engine.start()
    runner_engine.push_input(InputKind.JUMP)
    runner_engine.step()
    assert len(runner_engine.inputs) == 0
    velocity = runner_engine.snapshot().player.vertical_velocity
    runner_engine.step()
    assert runner_engine.snapshot().player.vertical_velocity == pytest.approx(velocity + 0.6)
