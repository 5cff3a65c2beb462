"""Monster definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class MonsterDef:
    """Base stats for one monster archetype."""

    id: str
    role: str
    base_level_offset: float
    base_hp: float
    base_dps: float
    base_def: float
    base_res: Mapping[str, float]
    ai: str
