"""Deterministic seeding utilities for reproducibility.

Provides a single function to set seeds across the random number generators
used by the test suite: Python's random and NumPy.
"""

import random
from typing import Optional

import numpy as np


def set_seed(seed: Optional[int] = None) -> int:
    """Set random seeds for reproducibility across all RNGs.

    Args:
        seed: The seed value to use. If None, a random seed will be generated
              and returned for later reproducibility.

    Returns:
        The seed value that was used (useful when seed=None was passed).

    Example:
        >>> from pokersolver import set_seed
        >>> set_seed(42)
        42
    """
    if seed is None:
        seed = random.randint(0, 2**32 - 1)

    random.seed(seed)
    np.random.seed(seed)

    return seed
