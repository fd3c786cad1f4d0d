"""Repository for combat rules and pacing settings."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Union

from rngarena.data.repositories.base import RepositoryBase
from rngarena.domain.combat_rules import DEFAULT_RULES, PVE_RULES, CombatRules
from rngarena.domain.defs import TimingDef

ArenaSetting = Union[CombatRules, TimingDef]

_INT_RULES = (
    "attack_die",
    "miss_roll",
    "critical_roll",
    "critical_damage",
    "critical_block_damage",
    "defence_die",
    "defence_offset",
    "block_roll",
)
_OPTIONAL_INT_RULES = ("parry_roll", "dodge_roll")
_BOOL_RULES = ("arms_stance", "parry_reflects_critical_damage")


class ArenaSettingsRepository(RepositoryBase[ArenaSetting]):
    """
    Loads the combat rules and presentation timing from arena.json.

    ``rules`` holds the tournament table and ``pve_rules`` the hero-versus-
    monster table. Each section only overrides the keys it names; everything
    else keeps the built-in preset.
    """

    kind = "arena settings"

    def __init__(self, base_path=None) -> None:
        super().__init__("arena.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ArenaSetting]:
        return {
            "rules": self._build_rules(raw, "rules", DEFAULT_RULES),
            "pve_rules": self._build_rules(raw, "pve_rules", PVE_RULES),
            "timing": self._build_timing(raw),
        }

    def _build_rules(self, raw: dict[str, object], section: str, preset: CombatRules) -> CombatRules:
        rules_raw = self._section(raw, section, section)
        unknown = sorted(set(rules_raw) - set(_INT_RULES) - set(_OPTIONAL_INT_RULES) - set(_BOOL_RULES))
        if unknown:
            raise self._invalid(f"{section} has unknown keys: {', '.join(unknown)}.")
        overrides: dict[str, object] = {}
        for key in _INT_RULES:
            if key in rules_raw:
                overrides[key] = self._field(rules_raw, key, int, f"{section}.{key}")
        for key in _OPTIONAL_INT_RULES:
            if key in rules_raw:
                overrides[key] = self._field(rules_raw, key, int, f"{section}.{key}", nullable=True)
        for key in _BOOL_RULES:
            if key in rules_raw:
                overrides[key] = self._field(rules_raw, key, bool, f"{section}.{key}")
        try:
            return replace(preset, **overrides)
        except ValueError as exc:
            raise self._invalid(f"{section} are invalid: {exc}") from exc

    def _build_timing(self, raw: dict[str, object]) -> TimingDef:
        timing_raw = self._section(raw, "timing", "timing")
        delays: dict[str, int] = {}
        for key in ("battle_start_delay_ms", "turn_delay_ms"):
            if key in timing_raw:
                value = self._field(timing_raw, key, int, f"timing.{key}")
                if value < 0:
                    raise self._invalid(f"timing.{key} must be >= 0.")
                delays[key] = value
        return TimingDef(**delays)

    def rules(self) -> CombatRules:
        rules = self.get("rules")
        assert isinstance(rules, CombatRules)
        return rules

    def pve_rules(self) -> CombatRules:
        rules = self.get("pve_rules")
        assert isinstance(rules, CombatRules)
        return rules

    def timing(self) -> TimingDef:
        timing = self.get("timing")
        assert isinstance(timing, TimingDef)
        return timing
