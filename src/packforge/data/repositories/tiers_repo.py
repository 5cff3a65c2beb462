"""Tiers repository."""
from __future__ import annotations

from typing import Mapping

from packforge.data.repositories.base import FieldPath, RepositoryBase
from packforge.domain.defs import MinionsDef, TierDef


class TiersRepository(RepositoryBase[TierDef]):
    """Validates tier definitions, including optional minion escorts."""

    document = "tiers.json"
    record_kind = "tiers"

    def _build_record(self, record: Mapping[str, object], index: int) -> TierDef:
        tier_id = self._require_id(self._require_key(record, "id", index), index)
        level_bonus = self._number(record, "level_bonus", index)
        hp_mult = self._number(record, "hp_mult", index)
        dps_mult = self._number(record, "dps_mult", index)
        def_mult = self._number(record, "def_mult", index)
        affix_count = self._require_range(
            self._require_key(record, "affix_count", index), index, ("affix_count",)
        )
        minions = None
        if "minions" in record:
            minions = self._build_minions(record["minions"], index)
        return TierDef(
            id=tier_id,
            level_bonus=level_bonus,
            hp_mult=hp_mult,
            dps_mult=dps_mult,
            def_mult=def_mult,
            affix_count=affix_count,
            minions=minions,
        )

    def _build_minions(self, value: object, index: int) -> MinionsDef:
        path: FieldPath = ("minions",)
        payload = self._require_mapping(value, index, path)
        return MinionsDef(
            count_range=self._require_range(
                self._require_key(payload, "count_range", index, path), index, path + ("count_range",)
            ),
            level_bonus=self._number(payload, "level_bonus", index, path),
            hp_mult=self._number(payload, "hp_mult", index, path),
            dps_mult=self._number(payload, "dps_mult", index, path),
            def_mult=self._number(payload, "def_mult", index, path),
        )

    def _number(self, payload: Mapping[str, object], key: str, index: int, parent: FieldPath = ()) -> float:
        return self._require_number(self._require_key(payload, key, index, parent), index, parent + (key,))
