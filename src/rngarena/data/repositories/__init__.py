"""Repository exports."""

from .arena_repo import ArenaSettingsRepository
from .hp_tiers_repo import HpTiersRepository
from .monsters_repo import MonstersRepository

__all__ = [
    "ArenaSettingsRepository",
    "HpTiersRepository",
    "MonstersRepository",
]
