"""Shared type aliases for the core and domain layers."""
from typing import Literal

Side = Literal["left", "right"]
Stance = Literal["block", "parry"]
BeatResult = Literal["miss", "hit", "blocked", "parried", "dodged"]
CombatPhase = Literal["idle", "in_progress", "ended"]

SIDES: tuple[Side, Side] = ("left", "right")


def other_side(side: Side) -> Side:
    """Return the opposing side."""
    return "right" if side == "left" else "left"


__all__ = ["BeatResult", "CombatPhase", "SIDES", "Side", "Stance", "other_side"]
