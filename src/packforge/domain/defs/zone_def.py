"""Zone definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

LevelRange = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class SpawnEntryDef:
    monster_id: str
    weight: float


@dataclass(frozen=True, slots=True)
class ZoneDifficultyOverrideDef:
    """Zone-specific adjustments merged into the selected difficulty.

    Multipliers left as None keep the difficulty's own value.
    """

    hp_mult: float | None = None
    dmg_mult: float | None = None
    def_mult: float | None = None
    res_bonus: Mapping[str, float] | None = None


@dataclass(frozen=True, slots=True)
class ZoneDef:
    """A spawnable area with per-difficulty level ranges and a spawn table."""

    id: str
    name: str
    level_range: Mapping[str, LevelRange]
    spawn_table: Tuple[SpawnEntryDef, ...]
    tier_probs: Mapping[str, float] | None = None
    difficulty_multipliers: ZoneDifficultyOverrideDef | None = None

    @property
    def has_overrides(self) -> bool:
        return self.tier_probs is not None or self.difficulty_multipliers is not None
