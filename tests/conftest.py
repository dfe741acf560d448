import itertools
from dataclasses import replace

import numpy as np
import pytest

from invaders.actions import Key, Keyboard
from invaders.config import GameConfig
from invaders.sim.clock import Clock
from invaders.sim.session import Session


class FixedRandom:
    """Stand-in for np.random.Generator whose random() always returns `value`."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def fixed_random():
    """Factory for generators whose every draw is the given value."""
    return FixedRandom


@pytest.fixture
def never_fire(fixed_random):
    """Generator whose draws sit above both fire probabilities."""
    return fixed_random(0.999)


@pytest.fixture
def make_session():
    def _make(rng=None, seed: int = 0, **overrides) -> Session:
        cfg = replace(GameConfig(seed=seed), **overrides)
        return Session(cfg, rng if rng is not None else np.random.default_rng(seed))

    return _make


@pytest.fixture
def press():
    """Keyboard sampled once with the given keys down."""

    def _press(*keys: Key, keyboard: Keyboard | None = None) -> Keyboard:
        kb = keyboard if keyboard is not None else Keyboard()
        kb.sample(keys)
        return kb

    return _press


@pytest.fixture
def step_clock():
    def _make(step: float) -> Clock:
        return Clock(time_fn=itertools.count(0.0, step).__next__)

    return _make
