"""Pure resolution of a single combat beat."""
from __future__ import annotations

from dataclasses import dataclass

from rngarena.core.rng import DieRoller
from rngarena.core.types import BeatResult, Side, Stance
from rngarena.domain.combat_models import Combatant
from rngarena.domain.combat_rules import DEFAULT_RULES, CombatRules


@dataclass(frozen=True, slots=True)
class BeatOutcome:
    """
    Immutable record of one resolved beat.

    ``damage_dealt`` is applied to the defender and ``damage_reflected`` to the
    attacker. ``stance_consumed`` is the stance the defender held going into
    the beat (cleared by it). ``new_stance`` is the stance armed for the
    defender's next incoming attack.
    """

    beat: int
    attacker_side: Side
    defender_side: Side
    attack_roll: int
    is_critical: bool
    result: BeatResult
    defence_roll: int | None = None
    damage_dealt: int = 0
    damage_reflected: int = 0
    stance_consumed: Stance | None = None
    new_stance: Stance | None = None

    @property
    def is_miss(self) -> bool:
        return self.result == "miss"


def roll_attack(rng: DieRoller, rules: CombatRules = DEFAULT_RULES) -> tuple[int, bool, bool]:
    """Roll the attack die and return (roll, is_miss, is_critical)."""
    roll = rng.roll_die(rules.attack_die)
    is_miss = roll == rules.miss_roll
    is_critical = not is_miss and roll == rules.critical_roll
    return roll, is_miss, is_critical


def roll_defence(rng: DieRoller, rules: CombatRules = DEFAULT_RULES) -> int:
    """Roll the defence die, offset into the 2..8 band by the default rules."""
    return rng.roll_die(rules.defence_die) + rules.defence_offset


def hit_damage(attack_roll: int, is_critical: bool, rules: CombatRules = DEFAULT_RULES) -> int:
    return rules.critical_damage if is_critical else attack_roll


def block_damage(is_critical: bool, rules: CombatRules = DEFAULT_RULES) -> int:
    return rules.critical_block_damage if is_critical else 0


def parry_damage(attack_roll: int, is_critical: bool, rules: CombatRules = DEFAULT_RULES) -> int:
    if is_critical and rules.parry_reflects_critical_damage:
        return rules.critical_damage
    return attack_roll


def resolve_beat(
    attacker: Combatant,
    defender: Combatant,
    rng: DieRoller,
    *,
    beat: int = 1,
    rules: CombatRules = DEFAULT_RULES,
) -> BeatOutcome:
    """
    Resolve one attack of ``attacker`` against ``defender``.

    Neither combatant is mutated; callers apply the returned deltas. Dice are
    drawn in a fixed order: the attack die always, then the defence die only
    when the attack did not miss, the defender holds no stance and the
    defender is able to defend at all.
    """
    attack_roll, is_miss, is_critical = roll_attack(rng, rules)
    base = dict(
        beat=beat,
        attacker_side=attacker.side,
        defender_side=defender.side,
        attack_roll=attack_roll,
        is_critical=is_critical,
    )
    if is_miss:
        return BeatOutcome(result="miss", **base)

    held = defender.stance
    if held is not None:
        return _apply_defence(held, attack_roll, is_critical, rules, base, stance_consumed=held)

    if not defender.can_defend:
        return BeatOutcome(result="hit", damage_dealt=hit_damage(attack_roll, is_critical, rules), **base)

    defence_roll = roll_defence(rng, rules)
    if defence_roll == rules.dodge_roll:
        return BeatOutcome(result="dodged", defence_roll=defence_roll, **base)
    if defence_roll == rules.block_roll:
        return _apply_defence(
            "block",
            attack_roll,
            is_critical,
            rules,
            base,
            defence_roll=defence_roll,
            new_stance=_armed("block", rules),
        )
    if defence_roll == rules.parry_roll:
        return _apply_defence(
            "parry",
            attack_roll,
            is_critical,
            rules,
            base,
            defence_roll=defence_roll,
            new_stance=_armed("parry", rules),
        )
    return BeatOutcome(
        result="hit",
        defence_roll=defence_roll,
        damage_dealt=hit_damage(attack_roll, is_critical, rules),
        **base,
    )


def _armed(stance: Stance, rules: CombatRules) -> Stance | None:
    return stance if rules.arms_stance else None


def _apply_defence(
    stance: Stance,
    attack_roll: int,
    is_critical: bool,
    rules: CombatRules,
    base: dict,
    *,
    defence_roll: int | None = None,
    stance_consumed: Stance | None = None,
    new_stance: Stance | None = None,
) -> BeatOutcome:
    if stance == "block":
        return BeatOutcome(
            result="blocked",
            defence_roll=defence_roll,
            damage_dealt=block_damage(is_critical, rules),
            stance_consumed=stance_consumed,
            new_stance=new_stance,
            **base,
        )
    return BeatOutcome(
        result="parried",
        defence_roll=defence_roll,
        damage_reflected=parry_damage(attack_roll, is_critical, rules),
        stance_consumed=stance_consumed,
        new_stance=new_stance,
        **base,
    )


__all__ = [
    "BeatOutcome",
    "block_damage",
    "hit_damage",
    "parry_damage",
    "resolve_beat",
    "roll_attack",
    "roll_defence",
]
