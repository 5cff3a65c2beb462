"""Monsters repository."""
from __future__ import annotations

from typing import Mapping

from packforge.data.repositories.base import RepositoryBase
from packforge.domain.defs import MonsterDef


class MonstersRepository(RepositoryBase[MonsterDef]):
    """Validates monster definitions."""

    document = "monsters.json"
    record_kind = "monsters"

    def _build_record(self, record: Mapping[str, object], index: int) -> MonsterDef:
        return MonsterDef(
            id=self._require_id(self._require_key(record, "id", index), index),
            role=self._require_str(self._require_key(record, "role", index), index, ("role",)),
            base_level_offset=self._number(record, "base_level_offset", index),
            base_hp=self._number(record, "base_hp", index),
            base_dps=self._number(record, "base_dps", index),
            base_def=self._number(record, "base_def", index),
            base_res=self._require_number_map(
                self._require_key(record, "base_res", index), index, ("base_res",)
            ),
            ai=self._require_str(self._require_key(record, "ai", index), index, ("ai",)),
        )

    def _number(self, record: Mapping[str, object], key: str, index: int) -> float:
        return self._require_number(self._require_key(record, key, index), index, (key,))
