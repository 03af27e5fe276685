"""Booking submission: capture a rate, assemble, persist, notify."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..config import ValidationRules
from ..errors import ContractViolation, PersistenceError
from ..formatting import format_currency, quote_unit_label
from ..rates.models import Metal
from ..rates.store import RateStore
from ..storage import BOOKINGS_KEY, KeyValueStore
from .assembler import BookingForm, BookingRecord, ValidationFailure, assemble_booking

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Booking confirmed successfully!"
FAILURE_MESSAGE = "Failed to process booking. Please try again."

# Where an unreadable (non-list) bookings value is kept before starting a new list
BOOKINGS_BACKUP_KEY = f"{BOOKINGS_KEY}.corrupt"


class Notifier(ABC):
    """Presents a short message to the user with a severity
    ('success', 'error', 'info' or 'warning')."""

    @abstractmethod
    def notify(self, message: str, severity: str = "info") -> None: ...


class LoggingNotifier(Notifier):
    """Notifier that writes messages to the log. Used when no UI is attached."""

    _LEVELS = {
        "success": logging.INFO,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def notify(self, message: str, severity: str = "info") -> None:
        logger.log(self._LEVELS.get(severity, logging.INFO), "[%s] %s", severity, message)


class BookingService:
    """Handles a booking submission end to end.

    The current price is read once, as a single snapshot, before the form is
    assembled; later ticks cannot change a booking in flight.
    """

    def __init__(
        self,
        rate_store: RateStore,
        storage: KeyValueStore,
        rules: ValidationRules | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._rates = rate_store
        self._storage = storage
        self._rules = rules or ValidationRules()
        self._notifier = notifier or LoggingNotifier()

    def submit(self, form: BookingForm) -> BookingRecord | ValidationFailure:
        """Validate and record a booking.

        Returns the record on success or the field errors on failure.
        Unexpected errors are reported through the notifier and re-raised.
        """
        try:
            price = self._capture_price(form.metal_type)
            result = assemble_booking(form, price, self._rules)
        except Exception:
            logger.exception("Booking submission failed")
            self._notifier.notify(FAILURE_MESSAGE, "error")
            raise

        if isinstance(result, ValidationFailure):
            return result

        self._save(result)
        logger.info(
            "Booking %s confirmed: %g %s %s at %s/%s = %s",
            result.id,
            result.quantity,
            result.unit,
            result.metal_type.label,
            format_currency(result.current_price),
            quote_unit_label(result.metal_type),
            format_currency(result.total_value),
        )
        self._notifier.notify(SUCCESS_MESSAGE, "success")
        return result

    def list_bookings(self) -> list[dict]:
        """All persisted bookings, oldest first. Empty if the store can't be read."""
        try:
            bookings = self._storage.get(BOOKINGS_KEY, [])
        except PersistenceError as e:
            logger.warning("Could not read bookings: %s", e)
            return []
        return list(bookings) if isinstance(bookings, list) else []

    # --- Internal ---

    def _capture_price(self, metal_type: str | None) -> float:
        """Price of the selected metal, or 0.0 when the selection itself is invalid
        (the assembler reports that as a field error)."""
        try:
            metal = Metal.parse(metal_type or "")
        except ContractViolation:
            return 0.0
        return self._rates.get_snapshot(metal).price

    def _save(self, record: BookingRecord) -> None:
        try:
            bookings = self._storage.get(BOOKINGS_KEY, [])
            if not isinstance(bookings, list):
                logger.warning(
                    "Bookings value of type %s is not a list, moved to %r",
                    type(bookings).__name__,
                    BOOKINGS_BACKUP_KEY,
                )
                self._storage.set(BOOKINGS_BACKUP_KEY, bookings)
                bookings = []
            bookings.append(record.to_dict())
            self._storage.set(BOOKINGS_KEY, bookings)
        except PersistenceError as e:
            logger.warning("Failed to persist booking %s: %s", record.id, e)
