"""Barrier token forms used inside shortcodes.

Relative tokens (S10P, S-5P) are pip offsets from the spot at start and are
carried verbatim. Absolute barriers are written as integers scaled by 1e6
because shortcode fields only admit digits. Digit contracts carry the digit
itself.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

ATM_TOKEN = "S0P"
BARRIER_MULTIPLIER = Decimal(1_000_000)

_RELATIVE = re.compile(r"^S-?\d+P$", re.ASCII)
_SCALED = re.compile(r"^-?\d+$", re.ASCII)


def is_relative(token: str) -> bool:
    return _RELATIVE.match(token) is not None


def is_digit_contract(contract_type: str) -> bool:
    return contract_type.upper().startswith("DIGIT")


def plain_decimal(value: Decimal) -> str:
    """Fixed-point text without exponent or trailing zeros: Decimal('1E+2') -> '100'."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def barrier_for_shortcode(barrier: str, contract_type: str) -> str:
    """The shortcode field for a canonical barrier string."""
    if is_relative(barrier) or is_digit_contract(contract_type):
        return barrier
    try:
        value = Decimal(barrier)
    except InvalidOperation:
        return barrier
    return str(int((value * BARRIER_MULTIPLIER).to_integral_value()))


def barrier_from_shortcode(token: str, contract_type: str) -> str:
    """Inverse of barrier_for_shortcode for a raw shortcode field."""
    if is_relative(token) or is_digit_contract(contract_type) or not _SCALED.match(token):
        return token
    return plain_decimal(Decimal(token) / BARRIER_MULTIPLIER)


def is_set(barrier: str | None) -> bool:
    """False for a missing, empty or numerically zero barrier.

    A trailing 0 after a single barrier is the legacy filler written by the
    encoder, not a low barrier.
    """
    if not barrier:
        return False
    try:
        return Decimal(barrier) != 0
    except InvalidOperation:
        return True
