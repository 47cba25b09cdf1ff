"""Shared fixtures."""

import numpy as np
import pytest

from pokersolver.utils.seeding import set_seed


@pytest.fixture
def rng():
    """Seeded NumPy generator for randomized pools."""
    return np.random.default_rng(set_seed(2024))
