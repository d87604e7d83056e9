"""Tests for scoring, difficulty ramp, eras and round finalization."""

import dataclasses

import pytest

from scroller.config import ProgressionConfig, ScoringMode, SpeedRamp, flyer_config, runner_config
from scroller.entities import Obstacle, ObstacleKind
from scroller.events import EraChanged, EventBus, ObstaclePassed, RoundEnded
from scroller.systems import ProgressionTracker


def obstacle(obstacle_id: int = 1) -> Obstacle:
    return Obstacle(obstacle_id, ObstacleKind.GAP, x=40, width=52)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def flyer_tracker(bus):
    return ProgressionTracker(flyer_config().progression, bus)


@pytest.fixture
def runner_tracker(bus):
    return ProgressionTracker(runner_config().progression, bus)


class TestPassScoring:
    """Flyer: one point per obstacle passed."""

    def test_pass_counts_once(self, flyer_tracker, bus) -> None:
        events = []
        bus.subscribe(ObstaclePassed, events.append)
        rnd = flyer_tracker.new_round()
        o = obstacle()
        assert flyer_tracker.on_pass(rnd, o)
        assert not flyer_tracker.on_pass(rnd, o)
        assert rnd.score == 1
        assert rnd.obstacles_passed == 1
        assert len(events) == 1

    def test_ticks_do_not_score(self, flyer_tracker) -> None:
        rnd = flyer_tracker.new_round()
        for _ in range(500):
            flyer_tracker.on_tick(rnd, 1.0)
        assert rnd.score == 0
        assert rnd.distance == pytest.approx(500.0)

    def test_stepped_speed_ramp(self, flyer_tracker) -> None:
        rnd = flyer_tracker.new_round()
        assert rnd.speed == 3.5
        for i in range(10):
            flyer_tracker.on_pass(rnd, obstacle(i))
        assert rnd.speed == pytest.approx(3.75)

    def test_speed_capped(self, flyer_tracker) -> None:
        rnd = flyer_tracker.new_round()
        for i in range(1000):
            flyer_tracker.on_pass(rnd, obstacle(i))
        assert rnd.speed == flyer_tracker.config.max_speed


class TestDistanceScoring:
    """Runner: score is distance / distance_per_point."""

    def test_score_after_n_ticks(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        for _ in range(250):
            runner_tracker.on_tick(rnd, 1.0)
        assert rnd.score == 25

    def test_fractional_dt_accumulates(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        for _ in range(100):
            runner_tracker.on_tick(rnd, 0.5)
        assert rnd.score == 5

    def test_pass_does_not_add_points(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        runner_tracker.on_pass(rnd, obstacle())
        assert rnd.score == 0
        assert rnd.obstacles_passed == 1

    def test_continuous_ramp(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        for _ in range(1000):
            runner_tracker.on_tick(rnd, 1.0)
        assert rnd.speed == pytest.approx(6.0 + 1000 * 0.001)

    def test_continuous_ramp_capped(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        runner_tracker.on_tick(rnd, 1e6)
        assert rnd.speed == runner_tracker.config.max_speed

    def test_score_monotonic(self, runner_tracker) -> None:
        rnd = runner_tracker.new_round()
        last = 0
        for _ in range(300):
            runner_tracker.on_tick(rnd, 0.7)
            assert rnd.score >= last
            last = rnd.score


class TestEras:
    def test_era_flips_night(self, bus) -> None:
        config = dataclasses.replace(flyer_config().progression, era_threshold=3)
        tracker = ProgressionTracker(config, bus)
        events = []
        bus.subscribe(EraChanged, events.append)
        rnd = tracker.new_round()
        for i in range(7):
            tracker.on_pass(rnd, obstacle(i))
        assert rnd.era == 2
        assert not rnd.night
        assert [(e.era, e.night) for e in events] == [(1, True), (2, False)]

    def test_no_event_without_change(self, runner_tracker, bus) -> None:
        events = []
        bus.subscribe(EraChanged, events.append)
        rnd = runner_tracker.new_round()
        for _ in range(100):
            runner_tracker.on_tick(rnd, 1.0)
        assert events == []


class TestFinalize:
    """High score changes only at round termination."""

    def test_high_score_unchanged_until_finalize(self, flyer_tracker) -> None:
        rnd = flyer_tracker.new_round()
        for i in range(5):
            flyer_tracker.on_pass(rnd, obstacle(i))
        assert rnd.high_score == 0
        assert flyer_tracker.finalize(rnd)
        assert rnd.high_score == 5

    def test_finalize_is_idempotent(self, flyer_tracker, bus) -> None:
        events = []
        bus.subscribe(RoundEnded, events.append)
        rnd = flyer_tracker.new_round()
        flyer_tracker.on_pass(rnd, obstacle())
        flyer_tracker.finalize(rnd)
        assert not flyer_tracker.finalize(rnd)
        assert len(events) == 1
        assert events[0].new_record

    def test_lower_score_keeps_record(self, flyer_tracker) -> None:
        first = flyer_tracker.new_round()
        for i in range(4):
            flyer_tracker.on_pass(first, obstacle(i))
        flyer_tracker.finalize(first)

        second = flyer_tracker.new_round(first)
        assert second.high_score == 4
        assert second.score == 0
        flyer_tracker.on_pass(second, obstacle())
        assert not flyer_tracker.finalize(second)
        assert second.high_score == 4

    def test_new_round_resets_speed(self, runner_tracker) -> None:
        first = runner_tracker.new_round()
        runner_tracker.on_tick(first, 500.0)
        second = runner_tracker.new_round(first)
        assert second.speed == 6.0
        assert second.distance == 0.0


class TestConfigVariants:
    def test_no_ramp(self, bus) -> None:
        config = ProgressionConfig(scoring_mode=ScoringMode.PASS, speed_ramp=SpeedRamp.NONE)
        tracker = ProgressionTracker(config, bus)
        rnd = tracker.new_round()
        for i in range(50):
            tracker.on_pass(rnd, obstacle(i))
        assert rnd.speed == config.base_speed
