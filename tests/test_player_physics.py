"""Tests for PlayerBody impulses and integration."""

import math

import pytest

from scroller.config import flyer_config, runner_config
from scroller.entities import PlayerBody, Posture
from scroller.input import InputKind


@pytest.fixture
def flyer():
    return PlayerBody(flyer_config().physics)


@pytest.fixture
def runner():
    return PlayerBody(runner_config().physics)


class TestFlyerBody:
    """Always-falling body bounded by ceiling and floor."""

    def test_starts_airborne_at_rest(self, flyer) -> None:
        assert flyer.airborne
        assert flyer.vertical_velocity == 0.0
        assert flyer.position.y == 250

    def test_gravity_step(self, flyer) -> None:
        """One tick adds gravity to velocity, then velocity to position."""
        flyer.integrate(1.0)
        assert flyer.vertical_velocity == pytest.approx(0.6)
        assert flyer.position.y == pytest.approx(250.6)

    def test_flap_sets_upward_velocity(self, flyer) -> None:
        flyer.integrate(1.0)
        assert flyer.apply_impulse(InputKind.JUMP)
        assert flyer.vertical_velocity == -8
        flyer.integrate(1.0)
        assert flyer.vertical_velocity == pytest.approx(-7.4)

    def test_flap_allowed_while_airborne_once_per_tick(self, flyer) -> None:
        assert flyer.apply_impulse(InputKind.JUMP)
        assert not flyer.apply_impulse(InputKind.JUMP)
        flyer.integrate(1.0)
        assert flyer.apply_impulse(InputKind.JUMP)

    def test_begin_tick_resets_flap_guard(self, flyer) -> None:
        assert flyer.apply_impulse(InputKind.JUMP)
        flyer.begin_tick()
        assert flyer.apply_impulse(InputKind.JUMP)

    def test_duck_ignored(self, flyer) -> None:
        assert not flyer.apply_impulse(InputKind.DUCK_START)
        assert flyer.posture is Posture.NORMAL

    def test_ceiling_sets_left_bounds(self, flyer) -> None:
        flyer.position.y = 2.0
        flyer.apply_impulse(InputKind.JUMP)
        flyer.integrate(1.0)
        assert flyer.left_bounds
        assert flyer.position.y == 0.0

    def test_floor_sets_left_bounds(self, flyer) -> None:
        flyer.position.y = 479.9
        flyer.vertical_velocity = 1.0
        flyer.integrate(1.0)
        assert flyer.left_bounds
        assert flyer.position.y == 480

    def test_left_bounds_resets_next_tick(self, flyer) -> None:
        flyer.position.y = 2.0
        flyer.apply_impulse(InputKind.JUMP)
        flyer.integrate(1.0)
        flyer.integrate(1.0)
        assert not flyer.left_bounds

    def test_rotation_clamped(self, flyer) -> None:
        flyer.vertical_velocity = 3.0
        assert flyer.rotation == pytest.approx(0.3)
        flyer.vertical_velocity = 100.0
        assert flyer.rotation == pytest.approx(math.pi / 4)
        flyer.vertical_velocity = -100.0
        assert flyer.rotation == pytest.approx(-math.pi / 4)

    def test_zero_dt_moves_nothing(self, flyer) -> None:
        flyer.integrate(0.0)
        assert flyer.position.y == 250
        assert flyer.vertical_velocity == 0.0


class TestRunnerBody:
    """Ground-resting body that jumps and ducks."""

    def test_starts_grounded(self, runner) -> None:
        assert not runner.airborne
        runner.integrate(1.0)
        assert runner.position.y == runner.config.ground_y
        assert runner.vertical_velocity == 0.0

    def test_jump_from_ground(self, runner) -> None:
        assert runner.apply_impulse(InputKind.JUMP)
        assert runner.airborne
        assert runner.vertical_velocity == -12

    def test_jump_while_airborne_is_noop(self, runner) -> None:
        """A second jump mid-air leaves velocity untouched."""
        runner.apply_impulse(InputKind.JUMP)
        runner.integrate(1.0)
        velocity = runner.vertical_velocity
        assert not runner.apply_impulse(InputKind.JUMP)
        assert runner.vertical_velocity == velocity

    def test_lands_on_ground(self, runner) -> None:
        runner.apply_impulse(InputKind.JUMP)
        for _ in range(100):
            runner.integrate(1.0)
        assert not runner.airborne
        assert runner.position.y == runner.config.ground_y
        assert runner.vertical_velocity == 0.0

    def test_crouch_lowers_box_top_keeps_feet(self, runner) -> None:
        standing = runner.effective_box()
        assert runner.apply_impulse(InputKind.DUCK_START)
        crouched = runner.effective_box()
        assert crouched.height == runner.config.crouch_height
        assert crouched.bottom == standing.bottom
        assert crouched.top > standing.top

    def test_duck_end_restores_posture(self, runner) -> None:
        runner.apply_impulse(InputKind.DUCK_START)
        assert runner.apply_impulse(InputKind.DUCK_END)
        assert runner.posture is Posture.NORMAL
        assert not runner.apply_impulse(InputKind.DUCK_END)

    def test_cannot_duck_in_air(self, runner) -> None:
        runner.apply_impulse(InputKind.JUMP)
        assert not runner.apply_impulse(InputKind.DUCK_START)

    def test_cannot_jump_while_crouched(self, runner) -> None:
        runner.apply_impulse(InputKind.DUCK_START)
        assert not runner.apply_impulse(InputKind.JUMP)
        assert not runner.airborne

    def test_runner_never_leaves_bounds(self, runner) -> None:
        runner.apply_impulse(InputKind.JUMP)
        for _ in range(60):
            runner.integrate(1.0)
            assert not runner.left_bounds
