"""Repository for loot tables assigned to spawned units."""
from __future__ import annotations

from typing import List, Mapping

from packforge.data.repositories.base import RepositoryBase
from packforge.domain.defs import LootEntryDef, LootTableDef


class LootTablesRepository(RepositoryBase[LootTableDef]):
    """Validates loot table structure. Tables are never rolled by the spawner."""

    document = "loot_tables.json"
    record_kind = "tables"

    def _build_record(self, record: Mapping[str, object], index: int) -> LootTableDef:
        table_id = self._require_id(self._require_key(record, "id", index), index)
        rolls = self._require_int(self._require_key(record, "rolls", index), index, ("rolls",))
        if rolls < 0:
            raise self._error("must be >= 0", index=index, field_path=("rolls",), value=rolls)
        raw_entries = self._require_list(self._require_key(record, "entries", index), index, ("entries",))
        entries: List[LootEntryDef] = []
        for position, entry in enumerate(raw_entries):
            entry_path = ("entries", position)
            entry_map = self._require_mapping(entry, index, entry_path)
            group = self._require_str(
                self._require_key(entry_map, "group", index, entry_path), index, entry_path + ("group",)
            )
            weight = self._require_weight(
                self._require_key(entry_map, "weight", index, entry_path), index, entry_path + ("weight",)
            )
            entries.append(LootEntryDef(group=group, weight=weight))
        return LootTableDef(id=table_id, rolls=rolls, entries=tuple(entries))
