"""Spawned unit runtime models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Tuple

from .stats import StatBlock


@dataclass(frozen=True, slots=True)
class AffixInstance:
    """Snapshot of an affix attached to a unit."""

    id: str
    mods: Mapping[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "mods": dict(self.mods)}


@dataclass(slots=True)
class UnitInstance:
    """A generated monster ready to be handed to the world."""

    id: str
    monster_id: str
    name: str
    tier: str
    level: float
    stats: StatBlock
    resists: Dict[str, float]
    immune: FrozenSet[str]
    affixes: Tuple[AffixInstance, ...]
    ai: str
    loot_table: str

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready record for presentation and world collaborators."""
        return {
            "id": self.id,
            "monster_id": self.monster_id,
            "name": self.name,
            "tier": self.tier,
            "level": self.level,
            "stats": self.stats.to_dict(),
            "resists": dict(self.resists),
            "flags": {"immune": sorted(self.immune)},
            "affixes": [affix.to_dict() for affix in self.affixes],
            "ai": self.ai,
            "lootTable": self.loot_table,
        }
