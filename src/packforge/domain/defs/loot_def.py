"""Loot table definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class LootEntryDef:
    group: str
    weight: float


@dataclass(frozen=True, slots=True)
class LootTableDef:
    """Loot table assigned to spawned units; validated but never rolled here."""

    id: str
    rolls: int
    entries: Tuple[LootEntryDef, ...]
