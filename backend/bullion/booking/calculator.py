"""Booking valuation: quoted metal price and quantity to a rupee total."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..rates.models import GRAMS_PER_QUOTE, Metal

QUANTITY_UNIT = "grams"

_PAISE = Decimal("0.01")
_RUPEE = Decimal("1")


@dataclass(frozen=True, slots=True)
class BookingValuation:
    """Cost of a quantity (in grams) at a quoted price."""

    metal: Metal
    quantity: float
    price_per_base_unit: float  # ₹ per gram, 2 dp
    total_value: int  # Whole rupees
    unit: str = QUANTITY_UNIT

    def to_dict(self) -> dict:
        return {
            "metal": self.metal.value,
            "quantity": self.quantity,
            "price_per_base_unit": self.price_per_base_unit,
            "total_value": self.total_value,
            "unit": self.unit,
        }


def compute_valuation(metal_type: Metal | str, quantity: float, current_price: float) -> BookingValuation:
    """Value ``quantity`` grams of metal at ``current_price``.

    Gold is quoted per 10 g and silver per kg; both are normalized to a
    per-gram price. The total uses the unrounded per-gram price and is
    rounded half-up to whole rupees.

    >>> compute_valuation("Silver", 50, 106780).total_value
    5339
    """
    metal = Metal.parse(metal_type)

    per_gram = Decimal(str(current_price)) / GRAMS_PER_QUOTE[metal]
    total = per_gram * Decimal(str(quantity))

    return BookingValuation(
        metal=metal,
        quantity=float(quantity),
        price_per_base_unit=float(per_gram.quantize(_PAISE, rounding=ROUND_HALF_UP)),
        total_value=int(total.quantize(_RUPEE, rounding=ROUND_HALF_UP)),
    )
