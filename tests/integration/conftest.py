"""
Shared fixtures for integration tests.
"""

import pytest


@pytest.fixture
def or_inputs():
    """OR inputs, one list per pattern."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def or_outputs():
    """OR expected outputs."""
    return [0.0, 1.0, 1.0, 1.0]


@pytest.fixture
def or_fitness(or_inputs, or_outputs):
    """
    Fitness function for the OR problem (max 4.0 for a perfect solution).
    """
    def _fitness(genome):
        fitness = 4.0
        for inputs, expected in zip(or_inputs, or_outputs):
            error    = genome.evaluate(inputs)["output"] - expected
            fitness -= error ** 2
        return fitness
    return _fitness
