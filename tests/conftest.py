"""Pytest configuration and shared fixtures."""

import random

import numpy as np
import pytest

from evoneat.genotype.innovation_tracker import InnovationTracker
from evoneat.run.config import Config


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Seed the random generators so every test is reproducible."""
    random.seed(42)
    np.random.seed(42)
    yield
    random.seed(None)
    np.random.seed(None)


@pytest.fixture
def config():
    """Default configuration: 2 inputs, one output named 'output', small population."""
    config = Config()
    config.population_size = 20
    config.num_inputs = 2
    config.output_names = ['output']
    return config


@pytest.fixture
def tracker():
    """A fresh innovation tracker."""
    return InnovationTracker()
