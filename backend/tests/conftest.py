"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from bullion.config import DEFAULT_METALS, MetalConfig, ValidationRules
from bullion.rates.models import Metal
from bullion.rates.simulator import BoundedRandomWalk
from bullion.rates.store import RateStore
from bullion.storage import InMemoryStore


class ScriptedRng:
    """Stands in for np.random.Generator: replays fixed unit draws in [-0.5, 0.5]."""

    def __init__(self, draws):
        self._draws = list(draws)
        self.calls = 0

    def uniform(self, low, high, size):
        values = [self._draws[(self.calls + i) % len(self._draws)] for i in range(size)]
        self.calls += size
        return np.array(values)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def rules():
    return ValidationRules()


@pytest.fixture
def seeded_walk():
    return BoundedRandomWalk(rng=np.random.default_rng(42))


@pytest.fixture
def rate_store(memory_store, seeded_walk):
    return RateStore(DEFAULT_METALS, storage=memory_store, walk=seeded_walk)


@pytest.fixture
def simple_metals():
    """Round-number baselines that make tick arithmetic easy to check."""
    return {
        Metal.GOLD: MetalConfig(baseline_price=1000.0, max_fluctuation=100.0, quantity_ceiling=1000.0),
        Metal.SILVER: MetalConfig(baseline_price=2000.0, max_fluctuation=200.0, quantity_ceiling=100_000.0),
    }


@pytest.fixture
def scripted_rng():
    return ScriptedRng
