"""Factory for building unit instances from definitions."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from packforge.core.rng import RNG
from packforge.core.types import (
    COMMON_LOOT_TABLE,
    ELITE_LOOT_TABLE,
    ELITE_TIER_IDS,
    RESIST_KEYS,
)
from packforge.domain.defs import AffixDef, MinionsDef, MonsterDef
from packforge.domain.entities import AffixInstance, StatBlock, UnitInstance
from packforge.domain.formulas import (
    EffectiveDifficulty,
    clamp_resists,
    combine_resists,
    compute_monster_level,
    scale_stats,
)
from packforge.domain.game_data import GameData
from packforge.services.errors import FactoryError

from .id_factory import make_unit_id

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnitExtras:
    """Per-unit adjustments layered on top of the tier.

    ``affix_count`` set to None means "draw within the tier's affix_count range".
    """

    level_bonus: float | None = None
    hp_mult: float | None = None
    dps_mult: float | None = None
    def_mult: float | None = None
    affix_pool: Tuple[AffixDef, ...] = ()
    affix_count: int | None = None

    @classmethod
    def for_minions(cls, minions: MinionsDef) -> "UnitExtras":
        return cls(
            level_bonus=minions.level_bonus,
            hp_mult=minions.hp_mult,
            dps_mult=minions.dps_mult,
            def_mult=minions.def_mult,
            affix_pool=(),
            affix_count=0,
        )


def build_unit_instance(
    monster: MonsterDef,
    tier_id: str,
    zone_level: int,
    difficulty: EffectiveDifficulty,
    data: GameData,
    rng: RNG,
    extras: UnitExtras | None = None,
) -> UnitInstance:
    """Instantiate one unit, consuming draws for affix count, affixes and id in that order."""
    tier = data.tier_by_id(tier_id)
    if tier is None:
        raise FactoryError(f"Tier '{tier_id}' not found.")
    extras = extras or UnitExtras()

    if extras.affix_count is not None:
        count = extras.affix_count
    else:
        low, high = tier.affix_count
        count = rng.next_int(low, high + 1)
    affixes = roll_affixes(extras.affix_pool, count, rng)

    level = compute_monster_level(zone_level, monster, tier, extras)
    stats = scale_stats(
        StatBlock(hp=monster.base_hp, dps=monster.base_dps, defense=monster.base_def),
        zone_level=zone_level,
        monster_level=level,
        difficulty=difficulty,
        tier=tier,
        extra=extras,
    )

    resists = combine_resists(monster.base_res, difficulty.res_bonus, sum_affix_resists(affixes))
    clamped = clamp_resists(resists)

    loot_table = ELITE_LOOT_TABLE if tier_id in ELITE_TIER_IDS else COMMON_LOOT_TABLE
    return UnitInstance(
        id=make_unit_id(rng),
        monster_id=monster.id,
        name=f"{capitalize(monster.id)} {tier_id}",
        tier=tier_id,
        level=level,
        stats=stats,
        resists=clamped.values,
        immune=clamped.immune,
        affixes=tuple(affixes),
        ai=monster.ai,
        loot_table=loot_table,
    )


def roll_affixes(affix_pool: Sequence[AffixDef], count: float, rng: RNG) -> List[AffixInstance]:
    """Draw ``count`` distinct affixes without replacement.

    A count larger than the pool is clamped down to the pool size.
    """
    pool = list(affix_pool)
    wanted = max(0, math.floor(count))
    if wanted > len(pool):
        LOG.warning("affix count %d clamped to pool size %d", wanted, len(pool))
        wanted = len(pool)
    rolled: List[AffixInstance] = []
    for _ in range(wanted):
        picked = pool.pop(rng.next_int(0, len(pool)))
        rolled.append(AffixInstance(id=picked.id, mods=picked.mods))
    return rolled


def sum_affix_resists(affixes: Sequence[AffixInstance]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for affix in affixes:
        for key in RESIST_KEYS:
            value = _resist_mod(affix.mods, key)
            if value:
                totals[key] = totals.get(key, 0) + value
    return totals


def _resist_mod(mods: Mapping[str, float], key: str) -> float:
    value = mods.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
