"""Domain definition exports."""

from .affix_def import AffixDef
from .difficulty_def import DifficultyDef
from .loot_def import LootEntryDef, LootTableDef
from .monster_def import MonsterDef
from .tier_def import MinionsDef, TierDef
from .zone_def import LevelRange, SpawnEntryDef, ZoneDef, ZoneDifficultyOverrideDef

__all__ = [
    "AffixDef",
    "DifficultyDef",
    "LevelRange",
    "LootEntryDef",
    "LootTableDef",
    "MinionsDef",
    "MonsterDef",
    "SpawnEntryDef",
    "TierDef",
    "ZoneDef",
    "ZoneDifficultyOverrideDef",
]
