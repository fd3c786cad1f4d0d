"""Tournament HP tier definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class HpTierDef:
    """Starting health for both fighters in a given tournament round."""

    round: int
    hp: int
