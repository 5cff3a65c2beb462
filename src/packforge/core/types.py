"""Shared type aliases and key sets for the core and domain layers."""
from typing import Literal, Mapping, Tuple, Union

Seed = Union[str, int, float]

DifficultyKey = Literal["normal", "nightmare", "hell"]
DIFFICULTY_KEYS: Tuple[str, ...] = ("normal", "nightmare", "hell")

DamageType = Literal["laser", "plasma", "ion", "kinetic"]
RESIST_KEYS: Tuple[str, ...] = ("laser", "plasma", "ion", "kinetic")

ResistMap = Mapping[str, float]

NORMAL_TIER_ID = "normal"
UNIQUE_TIER_ID = "unique"
ELITE_TIER_IDS: Tuple[str, ...] = ("unique", "boss")

ELITE_LOOT_TABLE = "elite_creep"
COMMON_LOOT_TABLE = "common_creep"

__all__ = [
    "COMMON_LOOT_TABLE",
    "DIFFICULTY_KEYS",
    "DamageType",
    "DifficultyKey",
    "ELITE_LOOT_TABLE",
    "ELITE_TIER_IDS",
    "NORMAL_TIER_ID",
    "RESIST_KEYS",
    "ResistMap",
    "Seed",
    "UNIQUE_TIER_ID",
]
