"""Pytest configuration and shared fixtures for sarima tests.

This module provides:
- A deterministic numpy RNG fixture
- Small series builders shared by the pipeline tests
"""

import os

import numpy as np
import pytest


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(_seed())


@pytest.fixture
def periodic_series() -> np.ndarray:
    """Four repetitions of the pattern [2, 1, 2, 5]."""
    return np.array([2.0, 1.0, 2.0, 5.0] * 4)


@pytest.fixture
def trend_season_series() -> np.ndarray:
    """Linear trend plus a period-4 seasonal pattern, 24 points."""
    season = np.array([3.0, -1.0, 0.0, 5.0])
    t = np.arange(24)
    return t + season[t % 4]


@pytest.fixture
def ar1_series(rng: np.random.Generator) -> np.ndarray:
    """Zero-mean AR(1) series with phi = 0.6, 1000 points."""
    n = 1000
    eps = rng.normal(size=n)
    x = np.zeros(n)
    for t in range(1, n):
        x[t] = 0.6 * x[t - 1] + eps[t]
    return x - x.mean()
