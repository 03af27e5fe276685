"""Runtime configuration: baselines, fluctuation bounds, validation rules."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .rates.models import Metal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MetalConfig:
    """Per-metal simulation and booking parameters."""

    baseline_price: float  # ₹ per quote unit (10 g for gold, kg for silver)
    max_fluctuation: float  # Width of the per-tick uniform perturbation
    quantity_ceiling: float  # Grams
    purity: str = ""


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Constraints for one form field. Unset constraints are not checked."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None
    min_value: float | None = None
    max_value: float | None = None


DEFAULT_METALS: dict[Metal, MetalConfig] = {
    Metal.GOLD: MetalConfig(
        baseline_price=99320.0,
        max_fluctuation=50.0,
        quantity_ceiling=1000.0,
        purity="24K",
    ),
    Metal.SILVER: MetalConfig(
        baseline_price=106780.0,
        max_fluctuation=80.0,
        quantity_ceiling=100_000.0,  # 100 kg
        purity="999",
    ),
}

# Keyed by field kind name ("name", "phone", "email", "quantity")
DEFAULT_FIELD_RULES: dict[str, FieldRule] = {
    "name": FieldRule(min_length=2, max_length=50, pattern=re.compile(r"^[a-zA-Z\s]+$")),
    "phone": FieldRule(pattern=re.compile(r"^[6-9]\d{9}$")),
    "email": FieldRule(pattern=re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")),
    "quantity": FieldRule(min_value=1.0),
}


@dataclass(frozen=True)
class ValidationRules:
    """Field rules plus the metal-specific quantity ceilings."""

    fields: Mapping[str, FieldRule] = field(default_factory=lambda: dict(DEFAULT_FIELD_RULES))
    quantity_ceilings: Mapping[Metal, float] = field(
        default_factory=lambda: {m: c.quantity_ceiling for m, c in DEFAULT_METALS.items()}
    )

    def rule_for(self, kind: str) -> FieldRule | None:
        return self.fields.get(kind)

    def ceiling_for(self, metal: Metal) -> float | None:
        return self.quantity_ceilings.get(metal)


_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Application settings. Build from the environment with ``from_env``."""

    tick_interval: float = 5.0
    state_dir: Path | None = None
    respect_market_hours: bool = True
    log_level: str = "INFO"
    metals: Mapping[Metal, MetalConfig] = field(default_factory=lambda: dict(DEFAULT_METALS))

    @property
    def validation(self) -> ValidationRules:
        return ValidationRules(
            quantity_ceilings={m: c.quantity_ceiling for m, c in self.metals.items()}
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read overrides from BULLION_* environment variables.

        - BULLION_TICK_INTERVAL: seconds between ticks
        - BULLION_STATE_DIR: directory for the JSON store (blank → in-memory)
        - BULLION_MARKET_HOURS: "0"/"false"/"no"/"off" to tick around the clock
        - BULLION_LOG_LEVEL: logging level name
        """
        env = os.environ if environ is None else environ

        interval = cls.tick_interval
        raw_interval = env.get("BULLION_TICK_INTERVAL", "").strip()
        if raw_interval:
            try:
                interval = float(raw_interval)
                if interval <= 0:
                    raise ValueError("interval must be positive")
            except ValueError:
                logger.warning(
                    "Ignoring invalid BULLION_TICK_INTERVAL=%r, using %.1fs",
                    raw_interval,
                    cls.tick_interval,
                )
                interval = cls.tick_interval

        raw_dir = env.get("BULLION_STATE_DIR", "").strip()
        market_hours = env.get("BULLION_MARKET_HOURS", "").strip().lower()
        log_level = env.get("BULLION_LOG_LEVEL", "").strip().upper() or cls.log_level

        return cls(
            tick_interval=interval,
            state_dir=Path(raw_dir) if raw_dir else None,
            respect_market_hours=market_hours not in _FALSE_VALUES,
            log_level=log_level,
        )
