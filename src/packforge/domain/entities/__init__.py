"""Runtime entity exports."""

from .stats import StatBlock
from .unit import AffixInstance, UnitInstance

__all__ = [
    "AffixInstance",
    "StatBlock",
    "UnitInstance",
]
