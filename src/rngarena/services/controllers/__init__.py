"""UI-agnostic controllers for fight pacing."""
from __future__ import annotations

from .fight_controller import FightController

__all__ = [
    "FightController",
]
