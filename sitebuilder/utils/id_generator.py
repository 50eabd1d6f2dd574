"""
Utility functions for generating consistent reference formats.
"""

import random
import string
import time

_ALPHABET = string.ascii_uppercase + string.digits
_BASE36 = string.digits + string.ascii_uppercase


def _base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_booking_reference() -> str:
    """
    Generate a booking reference, e.g. BKLZ3F9Q1A7XK2.

    Millisecond timestamp in base 36 followed by six random characters.
    """
    suffix = "".join(random.choices(_ALPHABET, k=6))
    return f"BK{_base36(int(time.time() * 1000))}{suffix}"


def generate_confirmation_number() -> str:
    """Generate a confirmation number issued when a booking is confirmed."""
    suffix = "".join(random.choices(_ALPHABET, k=4))
    return f"CNF{_base36(int(time.time() * 1000))}{suffix}"
