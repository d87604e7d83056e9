"""Tests for configuration presets and validation."""

import dataclasses

import pytest

from scroller.config import (
    BodyKind,
    CollisionConfig,
    ObstacleLayout,
    ScoringMode,
    SpeedRamp,
    flyer_config,
    runner_config,
)
from scroller.exceptions import ConfigurationError, ScrollerError
from scroller.simulation import GameEngine


class TestPresets:
    def test_flyer_preset(self) -> None:
        config = flyer_config()
        assert config.physics.body_kind is BodyKind.FLYER
        assert config.obstacles.layout is ObstacleLayout.GAPS
        assert config.progression.scoring_mode is ScoringMode.PASS
        assert config.progression.speed_ramp is SpeedRamp.STEPPED
        assert config.physics.gravity == 0.6
        assert config.physics.impulse_velocity == -8
        assert config.obstacles.gap == 160
        assert config.collision.padding == 0

    def test_runner_preset(self) -> None:
        config = runner_config()
        assert config.physics.body_kind is BodyKind.RUNNER
        assert config.obstacles.layout is ObstacleLayout.LANES
        assert config.progression.scoring_mode is ScoringMode.DISTANCE
        assert config.progression.speed_ramp is SpeedRamp.CONTINUOUS
        assert config.collision.padding == 10

    def test_presets_are_independent(self) -> None:
        a = flyer_config()
        b = flyer_config()
        a.physics.gravity = 5.0
        assert b.physics.gravity == 0.6


class TestValidation:
    """Malformed configs fail at construction, never mid-round."""

    def test_negative_padding(self) -> None:
        with pytest.raises(ConfigurationError):
            flyer_config().with_overrides(collision=CollisionConfig(padding=-1))

    def test_padding_collapsing_hitbox(self) -> None:
        with pytest.raises(ConfigurationError):
            runner_config().with_overrides(collision=CollisionConfig(padding=13))

    def test_inverted_gap_bounds(self) -> None:
        config = flyer_config()
        obstacles = dataclasses.replace(config.obstacles, min_top_height=300, max_top_height=50)
        with pytest.raises(ConfigurationError):
            config.with_overrides(obstacles=obstacles)

    def test_downward_impulse(self) -> None:
        config = flyer_config()
        with pytest.raises(ConfigurationError):
            config.with_overrides(physics=dataclasses.replace(config.physics, impulse_velocity=8))

    def test_non_positive_spawn_interval(self) -> None:
        config = runner_config()
        with pytest.raises(ConfigurationError):
            config.with_overrides(obstacles=dataclasses.replace(config.obstacles, spawn_interval=0))

    def test_max_speed_below_base(self) -> None:
        config = runner_config()
        with pytest.raises(ConfigurationError):
            config.with_overrides(progression=dataclasses.replace(config.progression, max_speed=1.0))

    def test_engine_validates_config(self) -> None:
        config = flyer_config()
        config.collision.padding = -5
        with pytest.raises(ScrollerError):
            GameEngine(config, seed=1)

    def test_with_overrides_returns_copy(self) -> None:
        config = flyer_config()
        padded = config.with_overrides(collision=CollisionConfig(padding=4))
        assert padded.collision.padding == 4
        assert config.collision.padding == 0
