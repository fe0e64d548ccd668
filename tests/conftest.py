import random

import pytest

from game.shmup.entities import PlayerShip
from game.shmup.simulation import Simulation
from game.shmup.utils import Vector2


@pytest.fixture(autouse=True)
def _seeded():
    random.seed(1234)


@pytest.fixture
def player():
    return PlayerShip(pos=Vector2(100, 300))


@pytest.fixture
def sim():
    """A simulation already in the PLAYING state at t=0"""
    s = Simulation()
    s.start(0.0)
    return s
