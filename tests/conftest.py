"""Shared pytest fixtures for the econ_dispatch test suite."""

import logging

import matplotlib
import numpy as np
import pytest

from econ_dispatch.config import DispatchSettings
from econ_dispatch.DispatchProblem import DispatchProblem
from econ_dispatch.Generator import Generator
from econ_dispatch.logging_config import ROOT_LOGGER_NAME

matplotlib.use("Agg")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging so they do not outlive captured streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    return DispatchSettings(_env_file=None)


@pytest.fixture
def scenario_a():
    """One generator, min=0, max=100, a=2, b=10, d=5, load 50."""
    return DispatchProblem([Generator((0, 100), (2, 10, 5))], 50)


@pytest.fixture
def scenario_b():
    """Two generators with quadratic costs sharing a load of 60."""
    return DispatchProblem([Generator((0, 50), (1, 5, 0)), Generator((0, 50), (2, 2, 0))], 60)


def make_random_problem(rng: np.random.Generator, allow_shutdown: bool = False) -> DispatchProblem:
    """Small random instance: 1-3 generators, integer bounds up to 15, load up to 20."""
    generators = []
    for _ in range(rng.integers(1, 4)):
        p_min = int(rng.integers(0, 6))
        p_max = int(rng.integers(p_min, 16))
        a, b, d = rng.uniform(0, 2), rng.uniform(-2, 10), rng.uniform(0, 20)
        generators.append(Generator((p_min, p_max), (a, b, d)))
    load = int(rng.integers(1, 21))
    return DispatchProblem(generators, load, allow_shutdown)


@pytest.fixture
def random_problem():
    """Factory of random small problems, see make_random_problem."""
    return make_random_problem
