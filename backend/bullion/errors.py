"""Exceptions for the bullion desk.

Validation problems are returned as data (see ``bullion.booking``), so only
programmer errors and storage failures are raised.
"""


class BullionError(Exception):
    """Base exception for all bullion desk errors."""


class ContractViolation(BullionError, ValueError):
    """Raised when an unknown metal type or field kind reaches the core."""


class PersistenceError(BullionError):
    """Raised when the key-value store cannot read or write a value."""
