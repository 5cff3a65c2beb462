"""Deterministic level, stat and resistance scaling for spawned units."""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, NamedTuple, Protocol, Tuple

from packforge.core.rng import RNG
from packforge.core.types import RESIST_KEYS
from packforge.domain.defs import DifficultyDef, MonsterDef, TierDef, ZoneDef, ZoneDifficultyOverrideDef
from packforge.domain.entities import StatBlock

# Extra multiplier per level a unit sits above its zone level.
HP_PER_LEVEL_DIFF = 0.10
DPS_PER_LEVEL_DIFF = 0.08
DEF_PER_LEVEL_DIFF = 0.06

RESIST_MIN = -100
RESIST_MAX = 99
IMMUNE_THRESHOLD = 100

DEFAULT_TIER_PROBS: Mapping[str, float] = MappingProxyType(
    {"normal": 0.86, "champion": 0.10, "unique": 0.035, "boss": 0.005}
)


class FormulaError(ValueError):
    """Raised when a formula receives inputs it cannot scale."""


class Multipliers(Protocol):
    hp_mult: float
    dmg_mult: float
    def_mult: float


class ExtraScaling(Protocol):
    level_bonus: float | None
    hp_mult: float | None
    dps_mult: float | None
    def_mult: float | None


class ClampedResists(NamedTuple):
    values: Dict[str, float]
    immune: FrozenSet[str]


@dataclass(frozen=True, slots=True)
class EffectiveDifficulty:
    """A difficulty after zone overrides have been merged in."""

    id: str
    hp_mult: float
    dmg_mult: float
    def_mult: float
    res_bonus: Mapping[str, float]
    affix_pool: Tuple[str, ...]


def js_round(value: float) -> int:
    """Round half up towards positive infinity.

    ``0.49999999999999994`` rounds to 0 and ``-2.5`` rounds to -2.
    """
    whole = math.floor(value)
    if value - whole >= 0.5:
        return whole + 1
    return whole


def round2(value: float) -> float:
    """Round to two decimal places."""
    return js_round(value * 100) / 100


def clamp(value: float, low: float, high: float) -> float:
    if not math.isfinite(value):
        value = 0
    return low if value < low else high if value > high else value


def _number_or_zero(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return value


def roll_zone_level(zone: ZoneDef, difficulty: str, rng: RNG) -> int:
    """Draw a level inside the zone's inclusive range for ``difficulty``."""
    level_range = zone.level_range.get(difficulty)
    if level_range is None:
        raise FormulaError(f"Zone '{zone.id}' has no level_range for difficulty '{difficulty}'.")
    if len(level_range) != 2:
        raise FormulaError(f"Zone '{zone.id}' level_range for '{difficulty}' must be a [min, max] pair.")
    for bound in level_range:
        if isinstance(bound, bool) or not isinstance(bound, (int, float)) or not math.isfinite(bound):
            raise FormulaError(f"Zone '{zone.id}' level_range for '{difficulty}' is not numeric.")
    low, high = math.floor(level_range[0]), math.floor(level_range[1])
    if low > high:
        raise FormulaError(f"Zone '{zone.id}' level_range for '{difficulty}' has min greater than max.")
    return rng.next_int(low, high + 1)


def compute_monster_level(
    zone_level: float,
    monster: MonsterDef | None,
    tier: TierDef | None,
    extra: ExtraScaling | None = None,
) -> float:
    if isinstance(zone_level, bool) or not isinstance(zone_level, (int, float)) or not math.isfinite(zone_level):
        raise FormulaError("zone_level must be a number.")
    return (
        zone_level
        + _number_or_zero(getattr(monster, "base_level_offset", None))
        + _number_or_zero(getattr(tier, "level_bonus", None))
        + _number_or_zero(getattr(extra, "level_bonus", None))
    )


def scale_stats(
    base: StatBlock,
    *,
    zone_level: float,
    monster_level: float,
    difficulty: Multipliers,
    tier: TierDef,
    extra: ExtraScaling | None = None,
) -> StatBlock:
    """Apply difficulty, tier, level-gap and extra multipliers to base stats."""
    level_diff = max(monster_level - zone_level, 0)
    hp_mult = (
        difficulty.hp_mult
        * tier.hp_mult
        * (1 + HP_PER_LEVEL_DIFF * level_diff)
        * _extra_mult(extra, "hp_mult")
    )
    dps_mult = (
        difficulty.dmg_mult
        * tier.dps_mult
        * (1 + DPS_PER_LEVEL_DIFF * level_diff)
        * _extra_mult(extra, "dps_mult")
    )
    def_mult = (
        difficulty.def_mult
        * tier.def_mult
        * (1 + DEF_PER_LEVEL_DIFF * level_diff)
        * _extra_mult(extra, "def_mult")
    )
    return StatBlock(
        hp=js_round(base.hp * hp_mult),
        dps=round2(base.dps * dps_mult),
        defense=js_round(base.defense * def_mult),
    )


def _extra_mult(extra: ExtraScaling | None, name: str) -> float:
    value = getattr(extra, name, None)
    if value is None:
        return 1
    return value


def combine_resists(
    base: Mapping[str, object] | None,
    difficulty_bonus: Mapping[str, object] | None,
    affix_bonus: Mapping[str, object] | None = None,
) -> Dict[str, float]:
    """Add base, difficulty and affix resistances per damage type."""
    combined: Dict[str, float] = {}
    for key in RESIST_KEYS:
        combined[key] = (
            _number_or_zero((base or {}).get(key))
            + _number_or_zero((difficulty_bonus or {}).get(key))
            + _number_or_zero((affix_bonus or {}).get(key))
        )
    return combined


def clamp_resists(resists: Mapping[str, object]) -> ClampedResists:
    """Clamp each value into [-100, 99]; values of 100 or more also mark immunity."""
    values: Dict[str, float] = {}
    immune = set()
    for key, raw in resists.items():
        value = _number_or_zero(raw)
        if value >= IMMUNE_THRESHOLD:
            immune.add(key)
        values[key] = clamp(value, RESIST_MIN, RESIST_MAX)
    return ClampedResists(values=values, immune=frozenset(immune))


def pick_tier_id(
    default_probs: Mapping[str, float],
    zone_override_probs: Mapping[str, float] | None,
    rng: RNG,
) -> str:
    """Pick a tier id from the zone override when it has entries, else the defaults."""
    probs = zone_override_probs if zone_override_probs else default_probs
    if not isinstance(probs, Mapping):
        raise FormulaError("Tier probabilities must be a mapping.")
    weighted = [(tier_id, _number_or_zero(weight)) for tier_id, weight in probs.items()]
    weighted = [(tier_id, weight) for tier_id, weight in weighted if weight > 0]
    total = sum(weight for _tier_id, weight in weighted)
    if total <= 0:
        raise FormulaError("Tier probabilities have no positive weight.")
    draw = rng.next_float()
    cumulative = 0.0
    for tier_id, weight in weighted:
        cumulative += weight / total
        if draw < cumulative:
            return tier_id
    return weighted[-1][0]


def effective_difficulty(
    difficulty: DifficultyDef,
    override: ZoneDifficultyOverrideDef | None,
) -> EffectiveDifficulty:
    """Merge zone overrides: multipliers multiply, resistance bonuses add."""
    hp_mult = difficulty.hp_mult
    dmg_mult = difficulty.dmg_mult
    def_mult = difficulty.def_mult
    res_bonus = dict(difficulty.res_bonus)
    if override is not None:
        if override.hp_mult is not None:
            hp_mult *= override.hp_mult
        if override.dmg_mult is not None:
            dmg_mult *= override.dmg_mult
        if override.def_mult is not None:
            def_mult *= override.def_mult
        for key in RESIST_KEYS:
            bonus = (override.res_bonus or {}).get(key)
            if bonus is not None:
                res_bonus[key] = res_bonus.get(key, 0) + bonus
    return EffectiveDifficulty(
        id=difficulty.id,
        hp_mult=hp_mult,
        dmg_mult=dmg_mult,
        def_mult=def_mult,
        res_bonus=MappingProxyType(res_bonus),
        affix_pool=difficulty.affix_pool,
    )
