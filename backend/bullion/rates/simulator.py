"""Bounded random-walk price simulator."""

from __future__ import annotations

import numpy as np


class BoundedRandomWalk:
    """Uniform random walk with a floor at zero.

    Each step adds a perturbation drawn uniformly from
    [-max_fluctuation/2, +max_fluctuation/2] to every price independently,
    then clamps the result to be non-negative.

    Pass a seeded ``np.random.Generator`` (or any object with a numpy-style
    ``uniform(low, high, size)``) to make the walk reproducible.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()

    def perturb(self, price: float, max_fluctuation: float) -> float:
        """Advance a single price by one step."""
        return self.step({"_": price}, {"_": max_fluctuation})["_"]

    def step(self, prices: dict, max_fluctuations: dict) -> dict:
        """Advance every price by one step. Returns {key: new_price}.

        Keys missing from ``max_fluctuations`` do not move.
        """
        keys = list(prices)
        if not keys:
            return {}

        widths = np.array([abs(float(max_fluctuations.get(k, 0.0))) for k in keys])
        draws = np.asarray(self._rng.uniform(-0.5, 0.5, size=len(keys)), dtype=float)
        current = np.array([float(prices[k]) for k in keys])

        # Scale unit draws by each key's width so one draw call covers all metals
        moved = np.maximum(current + draws * widths, 0.0)
        return {k: float(p) for k, p in zip(keys, moved)}
