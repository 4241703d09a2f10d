"""Shared pytest fixtures."""

import random

import pytest

from streamproof.common.field import PRIME
from streamproof.common.source import RandomSource


@pytest.fixture
def source() -> RandomSource:
    """Seeded data and challenge source."""
    return RandomSource(seed=1234)


@pytest.fixture
def field_samples() -> list:
    """Edge values plus seeded random field elements."""
    rng = random.Random(2024)
    edges = [0, 1, 2, 3, (1 << 32) - 1, 1 << 32, (1 << 32) + 1,
             (1 << 60), PRIME - 2, PRIME - 1]
    return edges + [rng.randrange(PRIME) for _ in range(40)]
