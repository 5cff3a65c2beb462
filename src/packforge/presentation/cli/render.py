"""Shared CLI rendering helpers."""
from __future__ import annotations

import json
from typing import Iterable, List, Sequence

from packforge.core.types import RESIST_KEYS
from packforge.domain.entities import UnitInstance
from packforge.domain.game_data import GameData
from packforge.services.diagnostics import SpawnDiagnostic


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_resists(unit: UnitInstance) -> str:
    parts = []
    for key in RESIST_KEYS:
        if key not in unit.resists:
            continue
        label = f"{key} {format_number(unit.resists[key])}"
        if key in unit.immune:
            label += " (immune)"
        parts.append(label)
    return ", ".join(parts)


def format_unit(unit: UnitInstance, *, role: str) -> List[str]:
    """Return the text block describing one unit."""
    stats = unit.stats
    lines = [
        f"{role}: {unit.name} [{unit.id}] lvl {format_number(unit.level)}",
        f"  hp {format_number(stats.hp)} | dps {stats.dps:.2f} | def {format_number(stats.defense)}",
        f"  resists: {format_resists(unit)}",
    ]
    if unit.affixes:
        lines.append(f"  affixes: {', '.join(affix.id for affix in unit.affixes)}")
    lines.append(f"  ai {unit.ai} | loot {unit.loot_table}")
    return lines


def render_pack(pack: Sequence[UnitInstance]) -> List[str]:
    lines: List[str] = []
    for position, unit in enumerate(pack):
        lines.extend(format_unit(unit, role="Leader" if position == 0 else f"Minion {position}"))
    return lines


def render_pack_json(pack: Iterable[UnitInstance]) -> str:
    return json.dumps([unit.to_dict() for unit in pack], indent=2)


def render_diagnostic(record: SpawnDiagnostic) -> str:
    return "DEBUG " + json.dumps(record.to_dict(), sort_keys=True)


def render_catalog(data: GameData) -> List[str]:
    lines = ["Zones:"]
    lines.extend(f"  {zone.id} - {zone.name}" for zone in data.zones)
    lines.append("Difficulties:")
    lines.extend(f"  {difficulty.id}" for difficulty in data.difficulties)
    return lines
