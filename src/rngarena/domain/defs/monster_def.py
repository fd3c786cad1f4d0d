"""PVE opponent definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MonsterRole = Literal["hero", "monster"]


@dataclass(slots=True)
class MonsterDef:
    """A PVE combatant template: the hero or one of the monsters."""

    id: str
    name: str
    health: int
    role: MonsterRole = "monster"
    # Training targets never roll defence.
    can_defend: bool = True
