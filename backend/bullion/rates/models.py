"""Data models for metal rates."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

from ..errors import ContractViolation


class Metal(str, Enum):
    """Bookable metals. Values are the persisted keys; labels are for display."""

    GOLD = "gold"
    SILVER = "silver"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str | Metal) -> Metal:
        """Accept a Metal, its key ("gold") or its label ("Gold")."""
        if isinstance(value, Metal):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ContractViolation(f"Unknown metal type: {value!r}") from None


# Grams covered by one quoted price: gold is quoted per 10 g, silver per kg.
GRAMS_PER_QUOTE: dict[Metal, int] = {
    Metal.GOLD: 10,
    Metal.SILVER: 1000,
}


def percentage_change(baseline: float, price: float) -> float:
    """Change from baseline to price as a percentage. 0 when baseline is 0."""
    if baseline == 0:
        return 0.0
    return (price - baseline) / baseline * 100


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """Immutable price state for one metal at a point in time.

    Snapshots are replaced wholesale on every tick, so a reader holding one
    never observes a half-applied update.
    """

    metal: Metal
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    timestamp: float = field(default_factory=time.time)  # Unix seconds

    @classmethod
    def seed(cls, metal: Metal, price: float, timestamp: float | None = None) -> RateSnapshot:
        """Snapshot for a freshly initialized metal: no change, high == low == price."""
        return cls(
            metal=metal,
            price=price,
            change=0.0,
            change_percent=0.0,
            high=price,
            low=price,
            timestamp=timestamp if timestamp is not None else time.time(),
        )

    @property
    def direction(self) -> str:
        """'up', 'down', or 'flat' relative to the baseline."""
        if self.change > 0:
            return "up"
        elif self.change < 0:
            return "down"
        return "flat"

    def to_dict(self) -> dict:
        """Serialize for JSON persistence and SSE transmission."""
        return {
            "metal": self.metal.value,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "high": self.high,
            "low": self.low,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, metal: Metal, data: dict) -> RateSnapshot:
        """Rebuild a snapshot from ``to_dict`` output.

        Raises KeyError, TypeError or ValueError on malformed input.
        """
        price = float(data["price"])
        if price < 0:
            raise ValueError(f"Negative persisted price for {metal.value}: {price}")
        return cls(
            metal=metal,
            price=price,
            change=float(data["change"]),
            change_percent=float(data["change_percent"]),
            # Widen so the restored snapshot still brackets its price
            high=max(float(data["high"]), price),
            low=min(float(data["low"]), price),
            timestamp=float(data.get("timestamp", time.time())),
        )
