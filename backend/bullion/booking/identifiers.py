"""Booking identifiers: 'PM' + base-36 milliseconds + base-36 random suffix."""

from __future__ import annotations

import random
import string
import time

BOOKING_ID_PREFIX = "PM"
SUFFIX_LENGTH = 6

_ALPHABET = string.digits + string.ascii_uppercase
_rng = random.SystemRandom()


def to_base36(number: int) -> str:
    """Uppercase base-36 encoding of a non-negative integer."""
    if number < 0:
        raise ValueError(f"Cannot base-36 encode a negative number: {number}")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_booking_id(now: float | None = None, rng: random.Random | None = None) -> str:
    """Return a display-friendly booking id such as 'PMMGV4Q2K1X7B9QZ'.

    Collisions are improbable, not impossible: ids from the same millisecond
    differ only by a 6-character random suffix (36**6 possibilities).
    """
    millis = int((time.time() if now is None else now) * 1000)
    source = rng or _rng
    suffix = "".join(source.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{BOOKING_ID_PREFIX}{to_base36(millis)}{suffix}"
