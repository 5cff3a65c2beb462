"""Difficulties repository."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from packforge.core.types import RESIST_KEYS
from packforge.data.repositories.base import RepositoryBase
from packforge.domain.defs import DifficultyDef


class DifficultiesRepository(RepositoryBase[DifficultyDef]):
    """Validates difficulty definitions."""

    document = "difficulties.json"
    record_kind = "difficulties"

    def _build_record(self, record: Mapping[str, object], index: int) -> DifficultyDef:
        difficulty_id = self._require_id(self._require_key(record, "id", index), index)
        return DifficultyDef(
            id=difficulty_id,
            hp_mult=self._require_number(self._require_key(record, "hp_mult", index), index, ("hp_mult",)),
            dmg_mult=self._require_number(self._require_key(record, "dmg_mult", index), index, ("dmg_mult",)),
            def_mult=self._require_number(self._require_key(record, "def_mult", index), index, ("def_mult",)),
            res_bonus=self._build_res_bonus(self._require_key(record, "res_bonus", index), index),
            affix_pool=self._require_str_list(
                self._require_key(record, "affix_pool", index), index, ("affix_pool",)
            ),
        )

    def _build_res_bonus(self, value: object, index: int) -> Mapping[str, float]:
        # A scalar bonus applies to every damage type.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            bonus = self._require_number(value, index, ("res_bonus",))
            return MappingProxyType({key: bonus for key in RESIST_KEYS})
        return self._require_number_map(value, index, ("res_bonus",))
