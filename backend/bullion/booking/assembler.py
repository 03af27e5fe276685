"""Turn a submitted booking form into a confirmed BookingRecord."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..config import ValidationRules
from ..errors import ContractViolation
from ..rates.models import Metal
from .calculator import compute_valuation
from .identifiers import generate_booking_id
from .validation import REQUIRED_MESSAGE, FieldKind, parse_quantity, validate_field

logger = logging.getLogger(__name__)

STATUS_CONFIRMED = "confirmed"

# Form field -> validator kind
FORM_FIELDS: dict[str, FieldKind] = {
    "full_name": FieldKind.NAME,
    "phone": FieldKind.PHONE,
    "email": FieldKind.EMAIL,
    "quantity": FieldKind.QUANTITY,
}


@dataclass(frozen=True, slots=True)
class BookingForm:
    """Raw, unvalidated booking input as submitted."""

    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    metal_type: str | None = None
    quantity: str | float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping) -> BookingForm:
        """Build from a dict, accepting either snake_case or the form's camelCase names."""
        return cls(
            full_name=data.get("full_name", data.get("fullName")),
            phone=data.get("phone"),
            email=data.get("email"),
            metal_type=data.get("metal_type", data.get("metalType")),
            quantity=data.get("quantity"),
        )


@dataclass(frozen=True, slots=True)
class BookingRecord:
    id: str
    full_name: str
    phone: str
    email: str
    metal_type: Metal
    quantity: float
    unit: str
    current_price: float
    price_per_base_unit: float
    total_value: int
    timestamp: datetime
    status: str = STATUS_CONFIRMED

    def to_dict(self) -> dict:
        """Serialize for JSON persistence."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "metal_type": self.metal_type.label,
            "quantity": self.quantity,
            "unit": self.unit,
            "current_price": self.current_price,
            "price_per_base_unit": self.price_per_base_unit,
            "total_value": self.total_value,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Every field-level problem found in a form, keyed by form field name."""

    errors: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return False


def assemble_booking(
    form: BookingForm,
    current_price: float,
    rules: ValidationRules | None = None,
    *,
    clock: Callable[[], datetime] | None = None,
    id_factory: Callable[[], str] = generate_booking_id,
) -> BookingRecord | ValidationFailure:
    """Validate ``form`` and, if it is clean, build a confirmed booking.

    ``current_price`` is the quoted price of the selected metal captured by
    the caller; it is copied into the record and never re-read. All field
    errors are collected, so callers can show them at once.
    """
    rules = rules or ValidationRules()
    errors: dict[str, str] = {}

    for name, kind in FORM_FIELDS.items():
        result = validate_field(kind, getattr(form, name), rules.fields)
        if not result.valid:
            errors[name] = result.error or "Invalid value"

    metal: Metal | None = None
    raw_metal = (form.metal_type or "").strip()
    if not raw_metal:
        errors["metal_type"] = REQUIRED_MESSAGE
    else:
        try:
            metal = Metal.parse(raw_metal)
        except ContractViolation:
            errors["metal_type"] = "Please select Gold or Silver"

    quantity = parse_quantity(form.quantity)
    # Holds even when the rules carry no quantity entry
    if "quantity" not in errors and (quantity is None or quantity <= 0):
        errors["quantity"] = "Quantity must be a positive number"
    if metal is not None and quantity is not None and "quantity" not in errors:
        ceiling = rules.ceiling_for(metal)
        if ceiling is not None and quantity > ceiling:
            errors["quantity"] = f"Maximum quantity for {metal.label} is {ceiling:g} grams"

    if errors or metal is None or quantity is None:
        logger.debug("Booking form rejected: %s", sorted(errors))
        return ValidationFailure(errors=errors)

    valuation = compute_valuation(metal, quantity, current_price)
    timestamp = clock() if clock is not None else datetime.now(timezone.utc)

    return BookingRecord(
        id=id_factory(),
        full_name=str(form.full_name).strip(),
        phone=str(form.phone).strip(),
        email=str(form.email).strip(),
        metal_type=metal,
        quantity=valuation.quantity,
        unit=valuation.unit,
        current_price=float(current_price),
        price_per_base_unit=valuation.price_per_base_unit,
        total_value=valuation.total_value,
        timestamp=timestamp,
    )
