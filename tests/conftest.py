from __future__ import annotations

import pytest

from mini_invaders.scenes.invaders import (
    InvadersIntent,
    InvadersSimulation,
    InvadersTickContext,
)
from mini_invaders.settings import GameSettings


class SequenceRandom:
    """Random source replaying fixed values, then ``default`` forever."""

    def __init__(self, values=(), default: float = 1.0):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def simulation(settings) -> InvadersSimulation:
    # aliens never fire unless a test says so
    return InvadersSimulation(settings=settings, rng=SequenceRandom())


@pytest.fixture
def world(simulation):
    return simulation.world


@pytest.fixture
def make_ctx(world):
    def _make(frame: int = 1, **intent) -> InvadersTickContext:
        return InvadersTickContext(
            world=world, intent=InvadersIntent(**intent), frame=frame
        )

    return _make


@pytest.fixture
def sequence_random():
    return SequenceRandom
