"""UI-agnostic pacing driver that advances a combat session between presentation delays."""
from __future__ import annotations

import time
from typing import Callable

from rngarena.core.types import Side
from rngarena.services.combat_session import CombatSession, EventSink


class FightController:
    """
    External scheduler for a combat session.

    The session resolves beats synchronously; this controller decides when
    the next beat happens so animations and audio have time to play.

    Responsibilities:
    - Start the session and wait ``start_delay`` seconds
    - Call ``advance`` once per beat with ``turn_delay`` seconds in between
    - Honour fast-forward and stop requests between beats

    Non-responsibilities (handled by presentation layer):
    - Formatting announcer text
    - Rendering health or stance indicators
    """

    def __init__(
        self,
        *,
        turn_delay: float = 1.8,
        start_delay: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if turn_delay < 0 or start_delay < 0:
            raise ValueError("Delays must be >= 0.")
        self._turn_delay = turn_delay
        self._start_delay = start_delay
        self._sleep = sleep
        self._stop_requested = False
        self.fast_forward = False

    @property
    def turn_delay(self) -> float:
        return self._turn_delay

    def stop(self) -> None:
        """Ask a running ``play`` loop to return before its next beat."""
        self._stop_requested = True

    def play(self, session: CombatSession, on_event: EventSink | None = None) -> Side | None:
        """
        Drive ``session`` until it ends or ``stop`` is called.

        Returns the winning side, or None when the loop was stopped early.
        """
        self._stop_requested = False
        unsubscribe = session.subscribe(on_event) if on_event is not None else None
        try:
            if not session.is_started():
                session.start()
                self._pause(self._start_delay)
            while not session.is_ended():
                if self._stop_requested:
                    return None
                session.advance()
                if not session.is_ended():
                    self._pause(self._turn_delay)
        finally:
            if unsubscribe is not None:
                unsubscribe()
        return session.winner()

    def _pause(self, seconds: float) -> None:
        if self.fast_forward or seconds <= 0:
            return
        self._sleep(seconds)
