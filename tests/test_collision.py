"""Tests for collision detection between the player and obstacles."""

import pytest

from scroller.config import flyer_config, runner_config
from scroller.entities import Box, Obstacle, ObstacleKind, PlayerBody
from scroller.events import CollisionDetected, EventBus
from scroller.input import InputKind
from scroller.simulation.frame_context import FrameContext
from scroller.simulation.state import GameState
from scroller.systems import CollisionSystem, ProgressionTracker, first_hit, intersects, out_of_bounds
from scroller.systems.obstacle_stream import SpawnClock

RUNNER_PADDING = 10.0


@pytest.fixture
def flyer():
    return PlayerBody(flyer_config().physics)


@pytest.fixture
def runner():
    return PlayerBody(runner_config().physics)


def ground(x: float, width: float = 30.0, height: float = 40.0, obstacle_id: int = 1) -> Obstacle:
    return Obstacle(obstacle_id, ObstacleKind.GROUND, x=x, width=width, y=250 - height, height=height)


def pipe(x: float, top_height: float, obstacle_id: int = 1) -> Obstacle:
    return Obstacle(obstacle_id, ObstacleKind.GAP, x=x, width=52, top_height=top_height, gap=160, overhang=600)


class TestBox:
    def test_touching_edges_do_not_overlap(self) -> None:
        assert not Box(0, 0, 10, 10).overlaps(Box(10, 0, 10, 10))
        assert not Box(0, 0, 10, 10).overlaps(Box(0, 10, 10, 10))

    def test_overlap(self) -> None:
        assert Box(0, 0, 10, 10).overlaps(Box(9, 9, 10, 10))

    def test_shrink(self) -> None:
        box = Box(0, 0, 30, 40).shrink(10)
        assert box.as_tuple() == (10, 10, 10, 20)


class TestIntersects:
    """Padded, strict overlap between player and obstacle boxes."""

    def test_edge_contact_after_padding_is_not_a_hit(self, runner) -> None:
        # Padded player right edge: 50 + 44 - 10 = 84; padded obstacle left: 74 + 10 = 84
        assert not intersects(runner, ground(74.0), RUNNER_PADDING)

    def test_one_unit_past_padding_is_a_hit(self, runner) -> None:
        assert intersects(runner, ground(73.0), RUNNER_PADDING)

    def test_padding_forgives_small_overlap(self, runner) -> None:
        assert intersects(runner, ground(80.0), 0.0)
        assert not intersects(runner, ground(80.0), RUNNER_PADDING)

    def test_is_pure(self, runner) -> None:
        obstacle = ground(73.0)
        before = (runner.position.y, runner.vertical_velocity, obstacle.x)
        intersects(runner, obstacle, RUNNER_PADDING)
        assert (runner.position.y, runner.vertical_velocity, obstacle.x) == before

    def test_gap_lower_pipe_hit(self, flyer) -> None:
        # Bird spans y 250..274; lower pipe starts at 100 + 160 = 260
        assert intersects(flyer, pipe(60.0, top_height=100))

    def test_gap_upper_pipe_hit(self, flyer) -> None:
        assert intersects(flyer, pipe(60.0, top_height=260))

    def test_inside_gap_is_clear(self, flyer) -> None:
        assert not intersects(flyer, pipe(60.0, top_height=200))

    def test_gap_edge_contact(self, flyer) -> None:
        assert not intersects(flyer, pipe(84.0, top_height=100))
        assert intersects(flyer, pipe(83.9, top_height=100))

    def test_low_aerial_hits_standing_misses_crouched(self, runner) -> None:
        bird = Obstacle(1, ObstacleKind.AERIAL, x=50, width=46, y=195, height=32)
        assert intersects(runner, bird, RUNNER_PADDING)
        runner.apply_impulse(InputKind.DUCK_START)
        assert not intersects(runner, bird, RUNNER_PADDING)

    def test_high_aerial_clears_standing(self, runner) -> None:
        bird = Obstacle(1, ObstacleKind.AERIAL, x=50, width=46, y=150, height=32)
        assert not intersects(runner, bird, RUNNER_PADDING)

    def test_first_hit_in_list_order(self, runner) -> None:
        obstacles = [ground(300.0, obstacle_id=1), ground(60.0, obstacle_id=2), ground(55.0, obstacle_id=3)]
        assert first_hit(runner, obstacles, RUNNER_PADDING).obstacle_id == 2
        assert first_hit(runner, obstacles[:1], RUNNER_PADDING) is None


class TestBounds:
    def test_flyer_out_of_bounds(self, flyer) -> None:
        assert not out_of_bounds(flyer)
        flyer.position.y = 480
        flyer.vertical_velocity = 5
        flyer.integrate(1.0)
        assert out_of_bounds(flyer)

    def test_runner_never_out_of_bounds(self, runner) -> None:
        runner.left_bounds = True
        assert not out_of_bounds(runner)


class TestCollisionSystem:
    """The system flags the frame context once per tick."""

    def _state(self, player) -> GameState:
        tracker = ProgressionTracker(flyer_config().progression)
        return GameState(player=player, round=tracker.new_round(), spawn_clock=SpawnClock())

    def test_hit_sets_context_and_emits(self, runner) -> None:
        bus = EventBus()
        events = []
        bus.subscribe(CollisionDetected, events.append)
        system = CollisionSystem(RUNNER_PADDING, bus)
        state = self._state(runner)
        state.obstacles.append(ground(60.0, obstacle_id=5))

        ctx = FrameContext(simulate=True)
        system.update(state, ctx)

        assert ctx.collided
        assert ctx.collision_obstacle_id == 5
        assert [e.obstacle_id for e in events] == [5]

    def test_second_check_in_same_tick_is_ignored(self, runner) -> None:
        bus = EventBus()
        events = []
        bus.subscribe(CollisionDetected, events.append)
        system = CollisionSystem(RUNNER_PADDING, bus)
        state = self._state(runner)
        state.obstacles.append(ground(60.0))

        ctx = FrameContext(simulate=True)
        system.update(state, ctx)
        system.update(state, ctx)
        assert len(events) == 1

    def test_bounds_hit_has_no_obstacle(self, flyer) -> None:
        system = CollisionSystem()
        flyer.left_bounds = True
        ctx = FrameContext(simulate=True)
        system.update(self._state(flyer), ctx)
        assert ctx.collided
        assert ctx.collision_obstacle_id is None

    def test_clear_tick(self, flyer) -> None:
        system = CollisionSystem()
        ctx = FrameContext(simulate=True)
        system.update(self._state(flyer), ctx)
        assert not ctx.collided
