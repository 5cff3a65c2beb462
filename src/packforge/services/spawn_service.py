"""Spawn pipeline turning (zone, difficulty, seed) into a pack of units."""
from __future__ import annotations

import logging
from typing import List, Mapping

from packforge.core.rng import RNG
from packforge.core.types import NORMAL_TIER_ID, UNIQUE_TIER_ID, Seed
from packforge.data.loader import GameDataLoader
from packforge.domain.entities import UnitInstance
from packforge.domain.formulas import (
    DEFAULT_TIER_PROBS,
    effective_difficulty,
    pick_tier_id,
    roll_zone_level,
)
from packforge.domain.game_data import GameData
from packforge.services.diagnostics import DiagnosticSink, SpawnDiagnostic, logging_sink
from packforge.services.errors import SpawnError
from packforge.services.factories import UnitExtras, build_unit_instance

LOG = logging.getLogger(__name__)


def generate_pack(
    data: GameData,
    zone_id: str,
    difficulty: str,
    seed: Seed | None = None,
    *,
    debug: bool = False,
    sink: DiagnosticSink | None = None,
    default_tier_probs: Mapping[str, float] = DEFAULT_TIER_PROBS,
) -> List[UnitInstance]:
    """Build a pack against an already loaded snapshot.

    All draws come from one RNG seeded here, in a fixed order: zone level,
    monster, tier, leader, minion count, minions. The result is the leader
    followed by its minions; any failure raises and no partial pack is returned.
    """
    rng = RNG(seed)

    zone = data.zone_by_id(zone_id)
    if zone is None:
        raise SpawnError(f"Zone '{zone_id}' not found.")
    if not zone.spawn_table:
        raise SpawnError(f"Zone '{zone_id}' has an empty spawn table.")

    zone_level = roll_zone_level(zone, difficulty, rng)

    entry = rng.pick_weighted(zone.spawn_table)
    monster = data.monster_by_id(entry.monster_id)
    if monster is None:
        raise SpawnError(f"Monster '{entry.monster_id}' not found.")

    tier_id = pick_tier_id(default_tier_probs, zone.tier_probs, rng)
    tier = data.tier_by_id(tier_id)
    if tier is None:
        raise SpawnError(f"Tier '{tier_id}' not found.")

    base_difficulty = data.difficulty_by_id(difficulty)
    if base_difficulty is None:
        raise SpawnError(f"Difficulty '{difficulty}' not found.")
    eff_difficulty = effective_difficulty(base_difficulty, zone.difficulty_multipliers)

    affix_pool = tuple(
        affix
        for affix in (data.affix_by_id(affix_id) for affix_id in base_difficulty.affix_pool)
        if affix is not None
    )

    leader = build_unit_instance(
        monster,
        tier_id,
        zone_level,
        eff_difficulty,
        data,
        rng,
        UnitExtras(affix_pool=affix_pool),
    )
    pack = [leader]

    if tier_id == UNIQUE_TIER_ID and tier.minions is not None:
        low, high = tier.minions.count_range
        count = rng.next_int(low, high + 1)
        minion_extras = UnitExtras.for_minions(tier.minions)
        for _ in range(count):
            pack.append(
                build_unit_instance(
                    monster,
                    NORMAL_TIER_ID,
                    zone_level,
                    eff_difficulty,
                    data,
                    rng,
                    minion_extras,
                )
            )

    if debug:
        (sink or logging_sink)(
            SpawnDiagnostic(
                zone_id=zone.id,
                tier_id=tier_id,
                zone_level=zone_level,
                hp_mult=eff_difficulty.hp_mult,
                dmg_mult=eff_difficulty.dmg_mult,
                def_mult=eff_difficulty.def_mult,
                res_bonus=eff_difficulty.res_bonus,
                override_applied=zone.has_overrides,
                pack_size=len(pack),
            )
        )
    return pack


class SpawnService:
    """Entry point for presentation and world collaborators.

    Loads the definitions once through the shared loader cache, then builds
    each pack synchronously from its own RNG stream.
    """

    def __init__(
        self,
        loader: GameDataLoader,
        *,
        diagnostics: DiagnosticSink | None = None,
        default_tier_probs: Mapping[str, float] | None = None,
    ) -> None:
        self._loader = loader
        self._diagnostics = diagnostics
        self._default_tier_probs = default_tier_probs or DEFAULT_TIER_PROBS

    async def load_data(self) -> GameData:
        return await self._loader.load()

    async def spawn_pack(
        self,
        zone_id: str,
        difficulty: str,
        seed: Seed | None = None,
        debug: bool = False,
    ) -> List[UnitInstance]:
        data = await self._loader.load()
        pack = generate_pack(
            data,
            zone_id,
            difficulty,
            seed,
            debug=debug,
            sink=self._diagnostics,
            default_tier_probs=self._default_tier_probs,
        )
        LOG.debug("spawned %d units in zone %s (%s)", len(pack), zone_id, difficulty)
        return pack
