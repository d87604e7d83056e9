"""Pytest configuration and fixtures for scroller tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def flyer_engine(seeded_rng):
    """Flyer engine in IDLE with a deterministic RNG."""
    from scroller.config import flyer_config
    from scroller.simulation import GameEngine

    return GameEngine(flyer_config(), rng=seeded_rng)


@pytest.fixture
def runner_engine(seeded_rng):
    """Runner engine in IDLE with a deterministic RNG."""
    from scroller.config import runner_config
    from scroller.simulation import GameEngine

    return GameEngine(runner_config(), rng=seeded_rng)
