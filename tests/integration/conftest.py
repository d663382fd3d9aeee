"""
Shared fixtures for integration tests.
"""

import pytest
from itertools import count


@pytest.fixture(autouse=True)
def reset_individual_ids():
    """Reset the Individual ID generator for reproducibility."""
    from tinynet.evolution import Individual
    Individual._id_generator = count(0)
    yield


@pytest.fixture
def xor_error(xor_inputs, xor_outputs):
    """
    Mean squared prediction error of a network over the 4 XOR cases.
    """
    def evaluate(network):
        errors = [(network.predict(x)[0] - t[0]) ** 2 for x, t in zip(xor_inputs, xor_outputs)]
        return sum(errors) / len(errors)
    return evaluate
