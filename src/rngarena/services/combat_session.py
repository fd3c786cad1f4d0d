"""Combat session driving two combatants beat by beat."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from rngarena.core.rng import RNG, DieRoller, SeededRNG, seed_from_names
from rngarena.core.types import SIDES, BeatResult, Side, Stance, other_side
from rngarena.domain.beat_resolution import BeatOutcome, resolve_beat
from rngarena.domain.combat_models import Combatant, CombatState
from rngarena.domain.combat_rules import DEFAULT_RULES, PVE_RULES, CombatRules
from rngarena.services.errors import CombatAlreadyStartedError, CombatEndedError, CombatSetupError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class CombatStartedEvent(CombatEvent):
    left_name: str
    right_name: str
    left_max_health: int
    right_max_health: int
    seed: int | None


@dataclass(slots=True)
class AttackDeclaredEvent(CombatEvent):
    beat: int
    attacker_side: Side
    attacker_name: str
    defender_name: str
    attack_roll: int
    is_critical: bool


@dataclass(slots=True)
class BeatResolvedEvent(CombatEvent):
    beat: int
    attacker_side: Side
    attacker_name: str
    defender_name: str
    attack_roll: int
    is_critical: bool
    result: BeatResult
    damage_dealt: int
    damage_reflected: int
    new_stance: Stance | None
    stance_consumed: Stance | None
    attacker_health: int
    defender_health: int


@dataclass(slots=True)
class CombatEndedEvent(CombatEvent):
    winner_side: Side
    winner_name: str
    loser_name: str
    winner_health: int
    beats: int


EventSink = Callable[[CombatEvent], None]


class CombatSession:
    """
    One fight between a left and a right combatant.

    The session owns both combatants, alternates the attacker after every
    beat and stops as soon as either health drops to zero or below. It is
    synchronous: pacing between beats belongs to whoever calls ``advance``.
    """

    def __init__(
        self,
        left_name: str,
        right_name: str,
        left_max_health: int,
        right_max_health: int,
        rng: DieRoller,
        *,
        rules: CombatRules = DEFAULT_RULES,
        seed: int | None = None,
        left_can_defend: bool = True,
        right_can_defend: bool = True,
    ) -> None:
        for label, name in (("left", left_name), ("right", right_name)):
            if not name or not name.strip():
                raise CombatSetupError(f"{label} combatant name must be a non-empty string.")
        for label, health in (("left", left_max_health), ("right", right_max_health)):
            if health <= 0:
                raise CombatSetupError(f"{label} max health must be > 0 (got {health}).")
        self._names = {"left": left_name, "right": right_name}
        self._max_health = {"left": left_max_health, "right": right_max_health}
        self._can_defend = {"left": left_can_defend, "right": right_can_defend}
        self._rng = rng
        self._rules = rules
        self._seed = seed
        self._sinks: List[EventSink] = []
        self._state = self._fresh_state()

    # -----------------------
    # Event sink
    # -----------------------
    def subscribe(self, sink: EventSink) -> Callable[[], None]:
        """Register a callback for every event; returns an unsubscribe function."""
        self._sinks.append(sink)

        def _unsubscribe() -> None:
            if sink in self._sinks:
                self._sinks.remove(sink)

        return _unsubscribe

    def _emit(self, events: Sequence[CombatEvent]) -> None:
        for event in events:
            for sink in list(self._sinks):
                sink(event)

    # -----------------------
    # Lifecycle
    # -----------------------
    def start(self) -> List[CombatEvent]:
        """Reset both combatants to full health and announce the fight."""
        if self._state.phase != "idle":
            raise CombatAlreadyStartedError("Combat session has already been started.")
        self._state = self._fresh_state()
        self._state.phase = "in_progress"
        events: List[CombatEvent] = [
            CombatStartedEvent(
                left_name=self._names["left"],
                right_name=self._names["right"],
                left_max_health=self._max_health["left"],
                right_max_health=self._max_health["right"],
                seed=self._seed,
            )
        ]
        logger.debug(
            "combat started: %s (%d) vs %s (%d), seed=%s",
            self._names["left"],
            self._max_health["left"],
            self._names["right"],
            self._max_health["right"],
            self._seed,
        )
        self._emit(events)
        return events

    def advance(self) -> List[CombatEvent]:
        """Resolve exactly one beat and return the events it produced."""
        if self._state.phase == "ended":
            raise CombatEndedError("Cannot advance a combat session that has already ended.")
        started: List[CombatEvent] = []
        if self._state.phase == "idle":
            started = self.start()

        state = self._state
        attacker = state.combatant(state.attacker)
        defender = state.combatant(state.defender)
        outcome = resolve_beat(attacker, defender, self._rng, beat=state.beat_number, rules=self._rules)

        # Commit every delta before anything is emitted.
        self._apply_outcome(attacker, defender, outcome)
        state.log.append(outcome)
        ended = self._update_victory()
        if not ended:
            state.attacker = state.defender
            state.beat_number += 1

        events: List[CombatEvent] = [
            AttackDeclaredEvent(
                beat=outcome.beat,
                attacker_side=attacker.side,
                attacker_name=attacker.display_name,
                defender_name=defender.display_name,
                attack_roll=outcome.attack_roll,
                is_critical=outcome.is_critical,
            ),
            BeatResolvedEvent(
                beat=outcome.beat,
                attacker_side=attacker.side,
                attacker_name=attacker.display_name,
                defender_name=defender.display_name,
                attack_roll=outcome.attack_roll,
                is_critical=outcome.is_critical,
                result=outcome.result,
                damage_dealt=outcome.damage_dealt,
                damage_reflected=outcome.damage_reflected,
                new_stance=outcome.new_stance,
                stance_consumed=outcome.stance_consumed,
                attacker_health=attacker.health,
                defender_health=defender.health,
            ),
        ]
        logger.debug(
            "beat %d: %s attacks (roll=%d crit=%s defence=%s) -> %s dealt=%d reflected=%d",
            outcome.beat,
            attacker.display_name,
            outcome.attack_roll,
            outcome.is_critical,
            outcome.defence_roll,
            outcome.result,
            outcome.damage_dealt,
            outcome.damage_reflected,
        )
        if ended:
            events.append(self._ended_event())
        self._emit(events)
        return started + events

    def run_to_end(self, max_beats: int | None = None) -> Side | None:
        """Advance until the fight ends or ``max_beats`` beats have been resolved."""
        resolved = 0
        while not self.is_ended():
            if max_beats is not None and resolved >= max_beats:
                break
            self.advance()
            resolved += 1
        return self.winner()

    # -----------------------
    # Queries
    # -----------------------
    def is_started(self) -> bool:
        return self._state.phase != "idle"

    def is_ended(self) -> bool:
        return self._state.phase == "ended"

    def winner(self) -> Side | None:
        return self._state.winner

    def get_health(self, side: Side) -> int:
        return self._combatant(side).health

    def get_display_health(self, side: Side) -> int:
        return self._combatant(side).display_health

    def get_max_health(self, side: Side) -> int:
        return self._combatant(side).max_health

    def get_stance(self, side: Side) -> Stance | None:
        return self._combatant(side).stance

    def get_name(self, side: Side) -> str:
        return self._combatant(side).display_name

    @property
    def attacker(self) -> Side:
        return self._state.attacker

    @property
    def beat_number(self) -> int:
        return self._state.beat_number

    @property
    def phase(self) -> str:
        return self._state.phase

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def rules(self) -> CombatRules:
        return self._rules

    @property
    def log(self) -> List[BeatOutcome]:
        return list(self._state.log)

    # -----------------------
    # Helpers
    # -----------------------
    def _fresh_state(self) -> CombatState:
        return CombatState(
            left=Combatant.fresh(
                "left", self._names["left"], self._max_health["left"], can_defend=self._can_defend["left"]
            ),
            right=Combatant.fresh(
                "right", self._names["right"], self._max_health["right"], can_defend=self._can_defend["right"]
            ),
        )

    def _combatant(self, side: Side) -> Combatant:
        if side not in SIDES:
            raise CombatSetupError(f"Unknown side '{side}'.")
        return self._state.combatant(side)

    @staticmethod
    def _apply_outcome(attacker: Combatant, defender: Combatant, outcome: BeatOutcome) -> None:
        if outcome.is_miss:
            return
        defender.health -= outcome.damage_dealt
        attacker.health -= outcome.damage_reflected
        defender.stance = outcome.new_stance

    def _update_victory(self) -> bool:
        state = self._state
        for side in SIDES:
            if not state.combatant(side).is_alive:
                state.phase = "ended"
                state.winner = other_side(side)
                return True
        return False

    def _ended_event(self) -> CombatEndedEvent:
        state = self._state
        assert state.winner is not None
        winner = state.combatant(state.winner)
        loser = state.opponent(state.winner)
        logger.info(
            "%s defeats %s with %d HP remaining after %d beats",
            winner.display_name,
            loser.display_name,
            winner.health,
            len(state.log),
        )
        return CombatEndedEvent(
            winner_side=winner.side,
            winner_name=winner.display_name,
            loser_name=loser.display_name,
            winner_health=winner.health,
            beats=len(state.log),
        )


def create_pvp_session(
    left_name: str,
    right_name: str,
    max_health: int,
    *,
    rules: CombatRules = DEFAULT_RULES,
) -> CombatSession:
    """Build a reproducible tournament fight seeded from both names."""
    seed = seed_from_names(left_name, right_name)
    rng = SeededRNG(seed)
    return CombatSession(
        left_name,
        right_name,
        max_health,
        max_health,
        rng,
        rules=rules,
        seed=rng.seed,
    )


def create_pve_session(
    hero_name: str,
    hero_health: int,
    monster_name: str,
    monster_health: int,
    *,
    rng: DieRoller | None = None,
    rules: CombatRules = PVE_RULES,
    monster_can_defend: bool = True,
) -> CombatSession:
    """
    Build a hero-versus-monster fight.

    The hero is always the left side and strikes first. Training targets pass
    ``monster_can_defend=False`` so every connecting blow lands.
    """
    return CombatSession(
        hero_name,
        monster_name,
        hero_health,
        monster_health,
        rng if rng is not None else RNG(),
        rules=rules,
        right_can_defend=monster_can_defend,
    )


__all__ = [
    "AttackDeclaredEvent",
    "BeatResolvedEvent",
    "CombatEndedEvent",
    "CombatEvent",
    "CombatSession",
    "CombatStartedEvent",
    "EventSink",
    "create_pve_session",
    "create_pvp_session",
]
