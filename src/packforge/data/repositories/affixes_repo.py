"""Affixes repository."""
from __future__ import annotations

from typing import Mapping

from packforge.data.repositories.base import RepositoryBase
from packforge.domain.defs import AffixDef


class AffixesRepository(RepositoryBase[AffixDef]):
    document = "affixes.json"
    record_kind = "affixes"

    def _build_record(self, record: Mapping[str, object], index: int) -> AffixDef:
        return AffixDef(
            id=self._require_id(self._require_key(record, "id", index), index),
            mods=self._require_number_map(self._require_key(record, "mods", index), index, ("mods",)),
        )
