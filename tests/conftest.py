"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densemat import Matrix, concatenate_rows


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def random_pair(rng):
    """Conformant (5x7, 7x4) pair with standard normal cells."""
    a = Matrix.from_array(rng.standard_normal((5, 7)))
    b = Matrix.from_array(rng.standard_normal((7, 4)))
    return a, b


@pytest.fixture
def integer_pair(rng):
    """Conformant (6x3, 3x5) pair with small integer-valued cells."""
    a = Matrix.from_array(rng.integers(-9, 10, size=(6, 3)))
    b = Matrix.from_array(rng.integers(-9, 10, size=(3, 5)))
    return a, b


@pytest.fixture
def six_rows():
    """6x3 matrix whose row i is filled with i + 1."""
    return concatenate_rows(*[Matrix.zeros(1, 3).add_scalar(i + 1) for i in range(6)])
