"""Validated, read-only snapshot of all six definition tables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, TypeVar

from packforge.domain.defs import (
    AffixDef,
    DifficultyDef,
    LootTableDef,
    MonsterDef,
    TierDef,
    ZoneDef,
)

T = TypeVar("T")


def _find(definitions: Iterable[T], def_id: str) -> T | None:
    for definition in definitions:
        if getattr(definition, "id", None) == def_id:
            return definition
    return None


@dataclass(frozen=True, slots=True)
class GameData:
    """Aggregate of every definition table.

    Built once by the loader and never mutated afterwards. Lookups scan the
    tables in document order and return None for unknown ids.
    """

    difficulties: Tuple[DifficultyDef, ...]
    zones: Tuple[ZoneDef, ...]
    monsters: Tuple[MonsterDef, ...]
    tiers: Tuple[TierDef, ...]
    affixes: Tuple[AffixDef, ...]
    loot_tables: Tuple[LootTableDef, ...]

    def difficulty_by_id(self, difficulty_id: str) -> DifficultyDef | None:
        return _find(self.difficulties, difficulty_id)

    def zone_by_id(self, zone_id: str) -> ZoneDef | None:
        return _find(self.zones, zone_id)

    def monster_by_id(self, monster_id: str) -> MonsterDef | None:
        return _find(self.monsters, monster_id)

    def tier_by_id(self, tier_id: str) -> TierDef | None:
        return _find(self.tiers, tier_id)

    def affix_by_id(self, affix_id: str) -> AffixDef | None:
        return _find(self.affixes, affix_id)

    def loot_table_by_id(self, table_id: str) -> LootTableDef | None:
        return _find(self.loot_tables, table_id)
