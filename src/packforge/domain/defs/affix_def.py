"""Affix definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class AffixDef:
    id: str
    mods: Mapping[str, float]
