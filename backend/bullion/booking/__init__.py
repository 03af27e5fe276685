"""Booking subsystem: validation, valuation and record assembly.

Public API:
    validate_field      - Validate one raw form value
    compute_valuation   - Quoted price + grams -> rupee valuation
    assemble_booking    - Form + captured price -> BookingRecord or ValidationFailure
    generate_booking_id - Display-friendly unique booking id
    BookingService      - Submission flow with persistence and notifications
"""

from .assembler import BookingForm, BookingRecord, ValidationFailure, assemble_booking
from .calculator import BookingValuation, compute_valuation
from .identifiers import generate_booking_id
from .service import BookingService, LoggingNotifier, Notifier
from .validation import FieldKind, ValidationResult, validate_field

__all__ = [
    "BookingForm",
    "BookingRecord",
    "BookingService",
    "BookingValuation",
    "FieldKind",
    "LoggingNotifier",
    "Notifier",
    "ValidationFailure",
    "ValidationResult",
    "assemble_booking",
    "compute_valuation",
    "generate_booking_id",
    "validate_field",
]
