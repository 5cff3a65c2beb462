"""Tier definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class MinionsDef:
    """Escort configuration attached to a tier."""

    count_range: Tuple[int, int]
    level_bonus: float
    hp_mult: float
    dps_mult: float
    def_mult: float


@dataclass(frozen=True, slots=True)
class TierDef:
    """Rarity class driving multipliers and affix count."""

    id: str
    level_bonus: float
    hp_mult: float
    dps_mult: float
    def_mult: float
    affix_count: Tuple[int, int]
    minions: MinionsDef | None = None
