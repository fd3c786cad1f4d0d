"""Service layer exports."""

from .errors import CombatAlreadyStartedError, CombatEndedError, CombatError, CombatSetupError
from .combat_session import (
    AttackDeclaredEvent,
    BeatResolvedEvent,
    CombatEndedEvent,
    CombatEvent,
    CombatSession,
    CombatStartedEvent,
    EventSink,
    create_pve_session,
    create_pvp_session,
)
from .controllers import FightController

__all__ = [
    "AttackDeclaredEvent",
    "BeatResolvedEvent",
    "CombatAlreadyStartedError",
    "CombatEndedError",
    "CombatEndedEvent",
    "CombatError",
    "CombatEvent",
    "CombatSession",
    "CombatSetupError",
    "CombatStartedEvent",
    "EventSink",
    "FightController",
    "create_pve_session",
    "create_pvp_session",
]
