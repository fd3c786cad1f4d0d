"""Announcer and combat-log text built from engine events."""
from __future__ import annotations

from typing import List

from rngarena.domain.beat_resolution import BeatOutcome
from rngarena.services.combat_session import (
    AttackDeclaredEvent,
    BeatResolvedEvent,
    CombatEndedEvent,
    CombatEvent,
    CombatStartedEvent,
)


def _damage_text(amount: int, is_critical: bool) -> str:
    return "CRIT" if is_critical else str(amount)


def format_event(event: CombatEvent, *, show_rolls: bool = False) -> List[str]:
    """Return the chat lines announcing ``event`` (possibly none)."""
    if isinstance(event, CombatStartedEvent):
        return [f"{event.left_name} ({event.left_max_health} HP) vs {event.right_name} ({event.right_max_health} HP)!"]

    if isinstance(event, AttackDeclaredEvent):
        if not show_rolls:
            return []
        crit = " CRITICAL" if event.is_critical else ""
        return [f"[beat {event.beat}] {event.attacker_name} rolls {event.attack_roll}{crit}"]

    if isinstance(event, BeatResolvedEvent):
        return _format_beat(event)

    if isinstance(event, CombatEndedEvent):
        return [f"{event.winner_name} defeats {event.loser_name} with {event.winner_health} HP remaining!"]

    return []


def _format_beat(event: BeatResolvedEvent) -> List[str]:
    attacker = event.attacker_name
    defender = event.defender_name
    if event.result == "miss":
        return [f"{attacker} swings and misses!"]

    lines: List[str] = []
    if event.result == "hit":
        lines.append(f"{attacker} deals {_damage_text(event.damage_dealt, event.is_critical)} damage to {defender}!")
    elif event.result == "blocked":
        if event.is_critical:
            lines.append(f"{defender} blocks the CRIT but takes {event.damage_dealt} damage!")
        else:
            lines.append(f"{defender} blocks {event.attack_roll} damage!")
    elif event.result == "parried":
        amount = _damage_text(event.damage_reflected, event.is_critical)
        lines.append(f"{defender} parries and reflects {amount} damage back to {attacker}!")
    elif event.result == "dodged":
        lines.append(f"{defender} dodges the attack!")

    if event.new_stance is not None:
        lines.append(f"{defender} prepares to {event.new_stance} the next attack!")
    return lines


def format_beat_log(outcome: BeatOutcome, attacker_name: str, defender_name: str) -> str:
    """Return the numbered combat-log entry for one beat."""
    prefix = f"Beat {outcome.beat}: "
    if outcome.result == "miss":
        return prefix + f"{attacker_name} attacks but misses!"
    if outcome.result == "hit":
        return prefix + f"{attacker_name} deals {_damage_text(outcome.damage_dealt, outcome.is_critical)} damage to {defender_name}!"
    if outcome.result == "dodged":
        return prefix + f"{defender_name} dodges the attack!"
    if outcome.result == "blocked":
        if outcome.is_critical:
            return prefix + f"{defender_name} blocks the CRIT but takes {outcome.damage_dealt} damage!"
        return prefix + f"{defender_name} blocks {outcome.attack_roll} damage!"
    amount = _damage_text(outcome.damage_reflected, outcome.is_critical)
    return prefix + f"{defender_name} parries and reflects {amount} damage back to {attacker_name}!"
