"""Stat models for spawned units."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StatBlock:
    """Hit points, damage per second and defense of a unit."""

    hp: float
    dps: float
    defense: float

    def to_dict(self) -> dict[str, float]:
        return {"hp": self.hp, "dps": self.dps, "def": self.defense}
