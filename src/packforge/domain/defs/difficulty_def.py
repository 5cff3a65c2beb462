"""Difficulty definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple


@dataclass(frozen=True, slots=True)
class DifficultyDef:
    """Global multipliers and the affix pool for one difficulty setting."""

    id: str
    hp_mult: float
    dmg_mult: float
    def_mult: float
    res_bonus: Mapping[str, float]
    affix_pool: Tuple[str, ...]
