"""Deterministic xorshift32 RNG shared by every spawn request."""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Sequence, TypeVar

from packforge.core.types import Seed

T = TypeVar("T")

_UINT32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296
DEFAULT_SEED = "default"


class RNGError(ValueError):
    """Raised when the RNG is asked for an impossible draw."""


def normalize_seed(value: float) -> int:
    """Floor a numeric seed and reduce it to the unsigned 32-bit range."""
    if not math.isfinite(value):
        return 0
    return math.floor(value) % _TWO_POW_32


def hash_seed(text: str) -> int:
    """Reduce a string seed with the ``31 * h + unit`` rolling hash."""
    h = 0
    raw = text.encode("utf-16-le", "surrogatepass")
    for index in range(0, len(raw), 2):
        unit = raw[index] | (raw[index + 1] << 8)
        h = (31 * h + unit) & _UINT32
    return h


def seed_to_state(seed: Seed | None) -> int:
    if seed is None:
        seed = DEFAULT_SEED
    if isinstance(seed, str):
        return hash_seed(seed)
    if isinstance(seed, bool) or not isinstance(seed, (int, float)):
        raise RNGError(f"Seed must be a string or a number, got {type(seed).__name__}.")
    return normalize_seed(seed)


class RNG:
    """Seeded xorshift32 stream producing floats, bounded ints and weighted picks.

    The state is a single 32-bit word; every draw advances it once with the
    ``x ^= x << 13; x ^= x >> 17; x ^= x << 5`` recurrence, so a given seed
    yields the same sequence on every platform.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: Seed | None = None) -> None:
        self._state = seed_to_state(seed)

    @property
    def state(self) -> int:
        return self._state

    def next_float(self) -> float:
        """Return the next float in ``[0, 1)``."""
        x = self._state
        x ^= (x << 13) & _UINT32
        x ^= x >> 17
        x ^= (x << 5) & _UINT32
        self._state = x
        return x / _TWO_POW_32

    def next_int(self, low: float, high: float) -> int:
        """Return an integer in the half-open range ``[low, high)``.

        Bounds are floored and swapped when reversed. One draw is consumed even
        when both bounds are equal.
        """
        low = math.floor(low)
        high = math.floor(high)
        if low > high:
            low, high = high, low
        return math.floor(self.next_float() * (high - low)) + low

    def pick_weighted(self, items: Sequence[T]) -> T:
        """Pick one item proportionally to its ``weight``.

        Non-numeric and negative weights count as zero. Raises RNGError when the
        sequence is empty or no item carries a positive weight.
        """
        if not items:
            raise RNGError("Cannot pick from an empty sequence.")
        weights = [_weight_of(item) for item in items]
        total = sum(weights)
        if total <= 0:
            raise RNGError("Cannot pick when total weight is not positive.")
        remaining = self.next_float() * total
        for item, weight in zip(items, weights):
            if remaining < weight:
                return item
            remaining -= weight
        return items[-1]


def _weight_of(item: Any) -> float:
    if isinstance(item, Mapping):
        weight = item.get("weight")
    else:
        weight = getattr(item, "weight", None)
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return 0.0
    if not math.isfinite(weight) or weight <= 0:
        return 0.0
    return float(weight)
