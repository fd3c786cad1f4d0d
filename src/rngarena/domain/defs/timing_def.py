"""Presentation pacing definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TimingDef:
    """Delays (milliseconds) the presentation scheduler waits around beats."""

    battle_start_delay_ms: int = 1500
    turn_delay_ms: int = 1800

    @property
    def battle_start_delay(self) -> float:
        return self.battle_start_delay_ms / 1000

    @property
    def turn_delay(self) -> float:
        return self.turn_delay_ms / 1000
