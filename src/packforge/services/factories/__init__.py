"""Factory helpers for runtime entities."""

from .id_factory import make_unit_id
from .unit_factory import UnitExtras, build_unit_instance, roll_affixes

__all__ = [
    "UnitExtras",
    "build_unit_instance",
    "make_unit_id",
    "roll_affixes",
]
