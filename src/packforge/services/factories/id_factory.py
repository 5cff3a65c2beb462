"""Utilities for creating deterministic unit identifiers."""
from __future__ import annotations

from packforge.core.rng import RNG

_ID_SPACE = 1_000_000_000
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def make_unit_id(rng: RNG, prefix: str = "u") -> str:
    """Generate a short display identifier from one RNG draw.

    Only meant to tell units apart in a UI; it is not unique across seeds.
    """
    return f"{prefix}-{to_base36(rng.next_int(0, _ID_SPACE))}"
