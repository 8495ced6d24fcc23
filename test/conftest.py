import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from TSP.TSP import City, TSPProblem


class FakeRng:
    """Replays scripted draws so operator outcomes can be checked exactly."""

    def __init__(self, integers=(), uniforms=(), randoms=()):
        self._integers = iter(integers)
        self._uniforms = iter(uniforms)
        self._randoms = iter(randoms)
        self.integer_calls = []

    def integers(self, low, high=None):
        self.integer_calls.append((low, high))
        return next(self._integers)

    def uniform(self, low=0.0, high=1.0):
        return next(self._uniforms)

    def random(self):
        return next(self._randoms)


@pytest.fixture
def square_problem():
    """Unit square; the optimal tour has length 4."""
    return TSPProblem([City("A", 0.0, 0.0), City("B", 0.0, 1.0), City("C", 1.0, 1.0), City("D", 1.0, 0.0)])


@pytest.fixture
def random_problem():
    """Eight cities scattered in a 100x100 box."""
    coords = np.random.default_rng(7).uniform(0, 100, size=(8, 2))
    return TSPProblem([City(f"city{i}", float(x), float(y)) for i, (x, y) in enumerate(coords)])


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def fake_rng():
    """Factory for scripted generators: fake_rng(integers=[...], uniforms=[...], randoms=[...])."""
    return FakeRng
