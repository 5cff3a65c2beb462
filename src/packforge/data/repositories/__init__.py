"""Repository exports."""

from .affixes_repo import AffixesRepository
from .difficulties_repo import DifficultiesRepository
from .loot_tables_repo import LootTablesRepository
from .monsters_repo import MonstersRepository
from .tiers_repo import TiersRepository
from .zones_repo import ZonesRepository

__all__ = [
    "AffixesRepository",
    "DifficultiesRepository",
    "LootTablesRepository",
    "MonstersRepository",
    "TiersRepository",
    "ZonesRepository",
]
