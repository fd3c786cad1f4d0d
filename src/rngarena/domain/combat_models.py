"""Combat domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from rngarena.core.types import CombatPhase, Side, Stance, other_side

if TYPE_CHECKING:
    from rngarena.domain.beat_resolution import BeatOutcome


@dataclass(slots=True)
class Combatant:
    """
    One fighter's health pool and armed defensive stance.

    A combatant with ``can_defend`` off never rolls defence and takes every
    connecting attack in full.
    """

    side: Side
    display_name: str
    max_health: int
    health: int
    stance: Stance | None = None
    can_defend: bool = True

    @classmethod
    def fresh(
        cls, side: Side, display_name: str, max_health: int, *, can_defend: bool = True
    ) -> "Combatant":
        if max_health <= 0:
            raise ValueError(f"max_health must be > 0 (got {max_health}).")
        return cls(
            side=side,
            display_name=display_name,
            max_health=max_health,
            health=max_health,
            can_defend=can_defend,
        )

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def display_health(self) -> int:
        """Health clamped at zero for renderers."""
        return max(0, self.health)


@dataclass(slots=True)
class CombatState:
    """Tracks the state of a single two-fighter combat."""

    left: Combatant
    right: Combatant
    attacker: Side = "left"
    beat_number: int = 1
    phase: CombatPhase = "idle"
    winner: Side | None = None
    log: List["BeatOutcome"] = field(default_factory=list)

    @property
    def defender(self) -> Side:
        return other_side(self.attacker)

    def combatant(self, side: Side) -> Combatant:
        if side == "left":
            return self.left
        if side == "right":
            return self.right
        raise ValueError(f"Unknown side '{side}'.")

    def opponent(self, side: Side) -> Combatant:
        return self.combatant(other_side(side))
