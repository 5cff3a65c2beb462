"""Zones repository."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping

from packforge.core.types import DIFFICULTY_KEYS
from packforge.data.repositories.base import RepositoryBase
from packforge.domain.defs import LevelRange, SpawnEntryDef, ZoneDef, ZoneDifficultyOverrideDef


class ZonesRepository(RepositoryBase[ZoneDef]):
    """Validates zone definitions.

    Monster references are checked later by the loader, once the monsters
    table is available.
    """

    document = "zones.json"
    record_kind = "zones"

    def _build_record(self, record: Mapping[str, object], index: int) -> ZoneDef:
        zone_id = self._require_id(self._require_key(record, "id", index), index)
        name = self._require_str(self._require_key(record, "name", index), index, ("name",))

        raw_ranges = self._require_mapping(
            self._require_key(record, "level_range", index), index, ("level_range",)
        )
        level_range: Dict[str, LevelRange] = {}
        for difficulty in DIFFICULTY_KEYS:
            raw_range = self._require_key(raw_ranges, difficulty, index, ("level_range",))
            level_range[difficulty] = self._require_range(raw_range, index, ("level_range", difficulty))

        raw_table = self._require_list(
            self._require_key(record, "spawn_table", index), index, ("spawn_table",)
        )
        if not raw_table:
            raise self._error("must not be empty", index=index, field_path=("spawn_table",), value=raw_table)
        spawn_table: List[SpawnEntryDef] = []
        for position, entry in enumerate(raw_table):
            entry_path = ("spawn_table", position)
            entry_map = self._require_mapping(entry, index, entry_path)
            monster_id = self._require_id(
                self._require_key(entry_map, "monster_id", index, entry_path),
                index,
                entry_path + ("monster_id",),
            )
            weight = self._require_weight(
                self._require_key(entry_map, "weight", index, entry_path),
                index,
                entry_path + ("weight",),
            )
            spawn_table.append(SpawnEntryDef(monster_id=monster_id, weight=weight))

        tier_probs = None
        if record.get("tier_probs") is not None:
            tier_probs = self._require_number_map(record["tier_probs"], index, ("tier_probs",))

        overrides = None
        if record.get("difficulty_multipliers") is not None:
            overrides = self._build_overrides(record["difficulty_multipliers"], index)

        return ZoneDef(
            id=zone_id,
            name=name,
            level_range=MappingProxyType(level_range),
            spawn_table=tuple(spawn_table),
            tier_probs=tier_probs,
            difficulty_multipliers=overrides,
        )

    def _build_overrides(self, value: object, index: int) -> ZoneDifficultyOverrideDef:
        path = ("difficulty_multipliers",)
        payload = self._require_mapping(value, index, path)
        res_bonus = None
        if payload.get("res_bonus") is not None:
            res_bonus = self._require_number_map(payload["res_bonus"], index, path + ("res_bonus",))
        return ZoneDifficultyOverrideDef(
            hp_mult=self._optional_number(payload, "hp_mult", index, path),
            dmg_mult=self._optional_number(payload, "dmg_mult", index, path),
            def_mult=self._optional_number(payload, "def_mult", index, path),
            res_bonus=res_bonus,
        )
