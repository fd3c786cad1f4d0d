"""Domain definition exports."""

from .hp_tier_def import HpTierDef
from .monster_def import MonsterDef
from .timing_def import TimingDef

__all__ = [
    "HpTierDef",
    "MonsterDef",
    "TimingDef",
]
