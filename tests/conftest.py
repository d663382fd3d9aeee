"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def uniform():
    """A seeded uniform generator, called as uniform(low, high)."""
    import numpy as np
    return np.random.default_rng(42).uniform


@pytest.fixture
def xor_inputs():
    """XOR inputs."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def xor_outputs():
    """XOR expected outputs."""
    return [[0.0], [1.0], [1.0], [0.0]]
