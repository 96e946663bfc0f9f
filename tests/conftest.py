import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

from core.boxes import Box


@pytest.fixture
def random_boxes():
    """Factory for reproducible random rectangles."""

    def _make(n, low=1, high=100, seed=0):
        rng = np.random.default_rng(seed)
        sizes = rng.integers(low, high + 1, size=(n, 2))
        return [Box(int(w), int(h), i) for i, (w, h) in enumerate(sizes)]

    return _make


@pytest.fixture
def random_squares():
    """Factory for reproducible random square sprites."""

    def _make(n, low=16, high=64, seed=0):
        rng = np.random.default_rng(seed)
        sides = rng.integers(low, high + 1, size=n)
        return [Box(int(s), int(s), i) for i, s in enumerate(sides)]

    return _make
