"""Pytest configuration and shared fixtures for extremum tests.

This module provides:
- A deterministic numpy RNG fixture
- Counting wrappers for objectives, to observe evaluation budgets
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


class CountingFunction:
    """Objective wrapper recording how often it was called."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = 0

    def __call__(self, *args):
        self.calls += 1
        return self.fn(*args)


@pytest.fixture
def counting():
    """Factory fixture wrapping a callable in a :class:`CountingFunction`."""
    return CountingFunction
