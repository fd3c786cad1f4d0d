"""Repository for tournament HP tiers."""
from __future__ import annotations

from typing import Dict

from rngarena.data.repositories.base import RepositoryBase
from rngarena.domain.defs import HpTierDef


class HpTiersRepository(RepositoryBase[HpTierDef]):
    """Loads the per-round starting health table."""

    kind = "hp tiers"

    def __init__(self, base_path=None) -> None:
        super().__init__("hp_tiers.json", base_path)
        self._default_hp: int | None = None

    def _build(self, raw: dict[str, object]) -> Dict[str, HpTierDef]:
        default_hp = self._field(raw, "default_hp", int, "default_hp")
        if default_hp <= 0:
            raise self._invalid("default_hp must be > 0.")
        self._default_hp = default_hp

        rounds = self._field(raw, "rounds", dict, "rounds")
        definitions: Dict[str, HpTierDef] = {}
        for round_key in rounds:
            try:
                round_number = int(round_key)
            except ValueError as exc:
                raise self._invalid(f"round key '{round_key}' must be an integer.") from exc
            if round_number <= 0:
                raise self._invalid(f"round '{round_key}' must be >= 1.")
            hp = self._field(rounds, round_key, int, f"round '{round_key}' hp")
            if hp <= 0:
                raise self._invalid(f"round '{round_key}' hp must be > 0.")
            definitions[str(round_number)] = HpTierDef(round=round_number, hp=hp)
        return definitions

    @property
    def default_hp(self) -> int:
        self._ensure_loaded()
        assert self._default_hp is not None
        return self._default_hp

    def hp_for_round(self, round_number: int) -> int:
        """Return the starting health for a round, falling back to the default tier."""
        try:
            return self.get(str(round_number)).hp
        except KeyError:
            return self.default_hp

    def all(self) -> list[HpTierDef]:
        """Return all tiers ordered by round number."""
        return sorted(super().all(), key=lambda tier: tier.round)
