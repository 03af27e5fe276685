"""Per-field validation of raw booking form input."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..config import FieldRule
from ..errors import ContractViolation

REQUIRED_MESSAGE = "This field is required"


class FieldKind(str, Enum):
    NAME = "name"
    PHONE = "phone"
    EMAIL = "email"
    QUANTITY = "quantity"

    @classmethod
    def parse(cls, value: str | FieldKind) -> FieldKind:
        if isinstance(value, FieldKind):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ContractViolation(f"Unknown field kind: {value!r}") from None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


def parse_quantity(raw: str | float | int | None) -> float | None:
    """Parse a quantity as a finite float, or None if it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def validate_field(
    kind: str | FieldKind,
    raw_value: str | float | int | None,
    rules: Mapping[str, FieldRule],
) -> ValidationResult:
    """Validate one raw form value.

    Missing or blank input fails with "This field is required" before any
    kind-specific rule. A kind with no configured rule is always valid.
    The first failing check wins. Raises ContractViolation for unknown kinds.
    """
    kind = FieldKind.parse(kind)

    value = "" if raw_value is None else str(raw_value).strip()
    if not value:
        return ValidationResult.fail(REQUIRED_MESSAGE)

    rule = rules.get(kind.value)
    if rule is None:
        return ValidationResult.ok()

    if kind is FieldKind.NAME:
        if rule.min_length is not None and len(value) < rule.min_length:
            return ValidationResult.fail(f"Name must be at least {rule.min_length} characters")
        if rule.max_length is not None and len(value) > rule.max_length:
            return ValidationResult.fail(f"Name must not exceed {rule.max_length} characters")
        if rule.pattern is not None and not rule.pattern.match(value):
            return ValidationResult.fail("Name can only contain letters and spaces")

    elif kind is FieldKind.PHONE:
        if rule.pattern is not None and not rule.pattern.match(value):
            return ValidationResult.fail("Please enter a valid 10-digit Indian mobile number")

    elif kind is FieldKind.EMAIL:
        if rule.pattern is not None and not rule.pattern.match(value):
            return ValidationResult.fail("Please enter a valid email address")

    elif kind is FieldKind.QUANTITY:
        quantity = parse_quantity(value)
        minimum = rule.min_value if rule.min_value is not None else 1.0
        if quantity is None or quantity < minimum:
            return ValidationResult.fail(f"Quantity must be at least {minimum:g}")
        if rule.max_value is not None and quantity > rule.max_value:
            return ValidationResult.fail(f"Quantity must not exceed {rule.max_value:g}")

    return ValidationResult.ok()
