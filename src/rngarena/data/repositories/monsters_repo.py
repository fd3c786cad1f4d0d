"""Repository for PVE hero and monster definitions."""
from __future__ import annotations

from typing import Dict

from rngarena.data.repositories.base import RepositoryBase
from rngarena.domain.defs import MonsterDef

_ROLES = ("hero", "monster")


class MonstersRepository(RepositoryBase[MonsterDef]):
    """Loads the hero and the monsters it can be sent against."""

    kind = "monsters"

    def __init__(self, base_path=None) -> None:
        super().__init__("monsters.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MonsterDef]:
        definitions: Dict[str, MonsterDef] = {}
        for monster_id in raw:
            if not monster_id.strip():
                raise self._invalid("monster id must be a non-empty string.")
            context = f"monster '{monster_id}'"
            entry = self._field(raw, monster_id, dict, context)
            name = self._field(entry, "name", str, f"{context} name").strip()
            if not name:
                raise self._invalid(f"{context} name must not be empty.")
            health = self._field(entry, "health", int, f"{context} health")
            if health <= 0:
                raise self._invalid(f"{context} health must be > 0.")
            role = self._field(entry, "role", str, f"{context} role", default="monster")
            if role not in _ROLES:
                raise self._invalid(f"{context} role must be one of {_ROLES}.")
            can_defend = self._field(entry, "can_defend", bool, f"{context} can_defend", default=True)
            definitions[monster_id] = MonsterDef(
                id=monster_id, name=name, health=health, role=role, can_defend=can_defend
            )

        heroes = [definition for definition in definitions.values() if definition.role == "hero"]
        if len(heroes) != 1:
            raise self._invalid(f"exactly one hero is required (found {len(heroes)}).")
        return definitions

    def hero(self) -> MonsterDef:
        """Return the single hero definition."""
        return next(definition for definition in self.all() if definition.role == "hero")

    def monsters(self) -> list[MonsterDef]:
        """Return every non-hero opponent."""
        return [definition for definition in self.all() if definition.role == "monster"]
