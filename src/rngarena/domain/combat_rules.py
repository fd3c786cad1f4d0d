"""Tunable constants for beat resolution."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CombatRules:
    """
    Dice faces and damage constants used by the beat resolver.

    The defence roll is ``roll_die(defence_die) + defence_offset``, giving the
    2..8 range with the defaults. ``parry_reflects_critical_damage`` selects
    whether a parried critical reflects ``critical_damage`` instead of the raw
    attack roll. ``parry_roll`` and ``dodge_roll`` may be ``None`` to disable
    that face. With ``arms_stance`` off a block or parry protects only the
    current beat and nothing carries over to the next attack.
    """

    attack_die: int = 6
    miss_roll: int = 6
    critical_roll: int = 5
    critical_damage: int = 7
    critical_block_damage: int = 3
    defence_die: int = 7
    defence_offset: int = 1
    block_roll: int = 7
    parry_roll: int | None = 8
    dodge_roll: int | None = None
    arms_stance: bool = True
    parry_reflects_critical_damage: bool = False

    def __post_init__(self) -> None:
        if self.attack_die <= 0 or self.defence_die <= 0:
            raise ValueError("Die sizes must be > 0.")
        if self.critical_damage < 0 or self.critical_block_damage < 0:
            raise ValueError("Damage constants must be >= 0.")
        faces = [face for face in (self.block_roll, self.parry_roll, self.dodge_roll) if face is not None]
        if len(set(faces)) != len(faces):
            raise ValueError("block_roll, parry_roll and dodge_roll must differ.")


DEFAULT_RULES = CombatRules()

# Hero-versus-monster table: a plain d6 where 3 defends and 6 dodges.
PVE_RULES = CombatRules(
    defence_die=6,
    defence_offset=0,
    block_roll=3,
    parry_roll=None,
    dodge_roll=6,
    arms_stance=False,
)
