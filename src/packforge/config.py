"""Runtime configuration for the pack generator.

Defaults can be overridden by a JSON file (``PACKFORGE_CONFIG`` or
``~/.config/packforge/config.json``) and then by environment variables.
Malformed overrides are logged and ignored.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

from packforge.core.rng import DEFAULT_SEED
from packforge.data import paths
from packforge.domain.formulas import DEFAULT_TIER_PROBS

LOG = logging.getLogger(__name__)

CONFIG_PATH_ENV = "PACKFORGE_CONFIG"
DEBUG_ENV = "PACKFORGE_DEBUG"
DEFAULT_SEED_ENV = "PACKFORGE_DEFAULT_SEED"
LOG_LEVEL_ENV = "PACKFORGE_LOG_LEVEL"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return Path.home() / ".config" / "packforge" / "config.json"


@dataclass(frozen=True)
class PackforgeConfig:
    definitions_dir: Path = field(default_factory=paths.get_bundled_definitions_path)
    default_seed: str = DEFAULT_SEED
    default_tier_probs: Mapping[str, float] = field(default_factory=lambda: DEFAULT_TIER_PROBS)
    debug: bool = False
    config_path: Path | None = None


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> PackforgeConfig:
    """Return defaults merged with file and environment overrides."""
    env = os.environ if environ is None else environ
    config_path = path or _env_path(env) or get_default_config_path()

    config = PackforgeConfig(config_path=config_path)
    file_overrides = _load_file_overrides(config_path)
    if file_overrides:
        config = replace(config, **file_overrides)
        LOG.info("config overrides applied from %s: %s", config_path, ", ".join(sorted(file_overrides)))

    env_overrides: Dict[str, Any] = {}
    if env.get(paths.DATA_DIR_ENV):
        env_overrides["definitions_dir"] = Path(env[paths.DATA_DIR_ENV])
    if env.get(DEFAULT_SEED_ENV):
        env_overrides["default_seed"] = env[DEFAULT_SEED_ENV]
    if DEBUG_ENV in env:
        env_overrides["debug"] = env[DEBUG_ENV] == "1"
    if env_overrides:
        config = replace(config, **env_overrides)
    return config


def _env_path(env: Mapping[str, str]) -> Path | None:
    raw = env.get(CONFIG_PATH_ENV)
    return Path(raw) if raw else None


def _load_file_overrides(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        LOG.warning("config file unreadable: %s", path, exc_info=True)
        return {}
    if not isinstance(raw, dict):
        LOG.warning("config file must contain an object: %s", path)
        return {}

    overrides: Dict[str, Any] = {}
    data_dir = raw.get("data_dir")
    if isinstance(data_dir, str) and data_dir:
        overrides["definitions_dir"] = (path.parent / data_dir).resolve()
    elif data_dir is not None:
        LOG.warning("config data_dir must be a non-empty string: %r", data_dir)

    seed = raw.get("default_seed")
    if isinstance(seed, str) and seed:
        overrides["default_seed"] = seed
    elif seed is not None:
        LOG.warning("config default_seed must be a non-empty string: %r", seed)

    debug = raw.get("debug")
    if isinstance(debug, bool):
        overrides["debug"] = debug
    elif debug is not None:
        LOG.warning("config debug must be a boolean: %r", debug)

    tier_probs = _parse_tier_probs(raw.get("tier_probs"))
    if tier_probs is not None:
        overrides["default_tier_probs"] = tier_probs

    unused = sorted(set(raw) - {"data_dir", "default_seed", "debug", "tier_probs"})
    if unused:
        LOG.debug("config ignored keys: %s", ", ".join(unused))
    return overrides


def _parse_tier_probs(value: object) -> Mapping[str, float] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        LOG.warning("config tier_probs must be an object: %r", value)
        return None
    probs: Dict[str, float] = {}
    for tier_id, weight in value.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            LOG.warning("config tier_probs weight for %s is not a number: %r", tier_id, weight)
            continue
        probs[tier_id] = weight
    if not any(weight > 0 for weight in probs.values()):
        LOG.warning("config tier_probs has no positive weight; keeping defaults")
        return None
    return MappingProxyType(probs)
