"""Structured debug records emitted by the spawn pipeline."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SpawnDiagnostic:
    """One advisory record per debug spawn call; not a machine contract."""

    zone_id: str
    tier_id: str
    zone_level: int
    hp_mult: float
    dmg_mult: float
    def_mult: float
    res_bonus: Mapping[str, float]
    override_applied: bool
    pack_size: int

    def to_dict(self) -> Dict[str, Any]:
        payload = {field.name: getattr(self, field.name) for field in fields(self)}
        payload["res_bonus"] = dict(self.res_bonus)
        return payload


DiagnosticSink = Callable[[SpawnDiagnostic], None]


def logging_sink(record: SpawnDiagnostic) -> None:
    """Default sink: log the record at DEBUG level."""
    LOG.debug(
        "spawn pack zone=%s tier=%s zone_level=%s mults=(hp=%s dmg=%s def=%s) res_bonus=%s override=%s size=%d",
        record.zone_id,
        record.tier_id,
        record.zone_level,
        record.hp_mult,
        record.dmg_mult,
        record.def_mult,
        dict(record.res_bonus),
        record.override_applied,
        record.pack_size,
    )


class CollectingSink:
    """Keeps every record it receives, for callers that inspect diagnostics."""

    def __init__(self) -> None:
        self.records: List[SpawnDiagnostic] = []

    def __call__(self, record: SpawnDiagnostic) -> None:
        self.records.append(record)
