"""In-memory rate store driven by the random-walk simulator."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from threading import Lock
from typing import TYPE_CHECKING

from ..errors import PersistenceError
from ..storage import RATES_KEY, KeyValueStore
from .models import Metal, RateSnapshot, percentage_change
from .simulator import BoundedRandomWalk

if TYPE_CHECKING:
    from ..config import MetalConfig

logger = logging.getLogger(__name__)


class RateStore:
    """Current gold/silver rate state, advanced one tick at a time.

    Writers: RateTicker (one at a time).
    Readers: SSE stream, REST snapshot endpoint, booking submission.

    Each snapshot is immutable and swapped in under a lock, so
    ``get_snapshot`` always returns a single point-in-time value.
    """

    def __init__(
        self,
        metals: Mapping[Metal, MetalConfig],
        storage: KeyValueStore | None = None,
        walk: BoundedRandomWalk | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = dict(metals)
        self._storage = storage
        self._walk = walk or BoundedRandomWalk()
        self._clock = clock
        self._baselines: dict[Metal, float] = {}
        self._snapshots: dict[Metal, RateSnapshot] = {}
        self._lock = Lock()
        self._version: int = 0  # Bumped on every state change
        self.initialize({metal: cfg.baseline_price for metal, cfg in self._config.items()})

    def initialize(self, baselines: Mapping[Metal, float]) -> None:
        """Reset every listed metal to its baseline: price == high == low == baseline."""
        now = self._clock()
        with self._lock:
            for metal, price in baselines.items():
                metal = Metal.parse(metal)
                if price < 0:
                    raise ValueError(f"Baseline price for {metal.value} must be >= 0, got {price}")
                self._baselines[metal] = float(price)
                self._snapshots[metal] = RateSnapshot.seed(metal, float(price), timestamp=now)
            self._version += 1

    def reset(self) -> None:
        """Explicitly discard running high/low and return to the baselines."""
        self.initialize(dict(self._baselines))

    def tick(self) -> dict[Metal, RateSnapshot]:
        """Advance every metal by one random-walk step and persist the result.

        Persistence failures are logged and never propagate; the in-memory
        state is authoritative.
        """
        with self._lock:
            prices = {metal: snap.price for metal, snap in self._snapshots.items()}
            widths = {
                metal: self._config[metal].max_fluctuation
                for metal in prices
                if metal in self._config
            }
            moved = self._walk.step(prices, widths)

            now = self._clock()
            for metal, raw_price in moved.items():
                prev = self._snapshots[metal]
                baseline = self._baselines[metal]
                price = round(max(raw_price, 0.0), 2)
                change = round(price - baseline, 2)
                self._snapshots[metal] = RateSnapshot(
                    metal=metal,
                    price=price,
                    change=change,
                    change_percent=round(percentage_change(baseline, price), 4),
                    high=max(prev.high, price),
                    low=min(prev.low, price),
                    timestamp=now,
                )
            self._version += 1
            snapshots = dict(self._snapshots)

        self._persist(snapshots)
        return snapshots

    def get_snapshot(self, metal: Metal | str) -> RateSnapshot:
        """Current snapshot for one metal. Raises ContractViolation for unknown metals."""
        metal = Metal.parse(metal)
        with self._lock:
            snap = self._snapshots.get(metal)
        if snap is None:
            raise KeyError(f"No rate configured for {metal.value}")
        return snap

    def get_all(self) -> dict[Metal, RateSnapshot]:
        """Snapshot of all current rates. Returns a shallow copy."""
        with self._lock:
            return dict(self._snapshots)

    def get_baseline(self, metal: Metal | str) -> float:
        metal = Metal.parse(metal)
        with self._lock:
            return self._baselines[metal]

    def to_dict(self) -> dict[str, dict]:
        """All snapshots keyed by metal value, in the persisted layout."""
        return {metal.value: snap.to_dict() for metal, snap in self.get_all().items()}

    def restore(self, persisted: Mapping | None) -> int:
        """Merge persisted snapshots over the current state. Returns how many were applied.

        Persisted values win per metal. Unknown metals and malformed entries
        are skipped with a warning. Baselines are never restored.
        """
        if not persisted:
            return 0
        if not isinstance(persisted, Mapping):
            logger.warning("Ignoring persisted rates of type %s", type(persisted).__name__)
            return 0

        restored: dict[Metal, RateSnapshot] = {}
        for key, data in persisted.items():
            try:
                metal = Metal.parse(key)
            except ValueError:
                logger.warning("Ignoring persisted rate for unknown metal %r", key)
                continue
            try:
                restored[metal] = RateSnapshot.from_dict(metal, data)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring malformed persisted rate for %s: %s", metal.value, e)

        with self._lock:
            for metal, snap in restored.items():
                if metal in self._snapshots:
                    self._snapshots[metal] = snap
            applied = sum(1 for metal in restored if metal in self._snapshots)
            if applied:
                self._version += 1
        logger.info("Restored %d persisted rate(s)", applied)
        return applied

    def load_persisted(self) -> int:
        """Read the persisted rates from storage (if any) and ``restore`` them."""
        if self._storage is None:
            return 0
        try:
            persisted = self._storage.get(RATES_KEY)
        except PersistenceError as e:
            logger.warning("Could not read persisted rates: %s", e)
            return 0
        return self.restore(persisted)

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)

    def __contains__(self, metal: object) -> bool:
        try:
            metal = Metal.parse(metal)  # type: ignore[arg-type]
        except ValueError:
            return False
        with self._lock:
            return metal in self._snapshots

    # --- Internal ---

    def _persist(self, snapshots: dict[Metal, RateSnapshot]) -> None:
        if self._storage is None:
            return
        try:
            self._storage.set(RATES_KEY, {m.value: s.to_dict() for m, s in snapshots.items()})
        except PersistenceError as e:
            logger.warning("Failed to persist rates: %s", e)
