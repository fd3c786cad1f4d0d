from __future__ import annotations

import json
from pathlib import Path

import pytest

from rngarena.data.errors import DataLoadError, DataValidationError
from rngarena.data.repositories import ArenaSettingsRepository, HpTiersRepository, MonstersRepository
from rngarena.domain.combat_rules import PVE_RULES, CombatRules


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir


def test_bundled_hp_tiers_match_tournament_table() -> None:
    repo = HpTiersRepository()

    assert [tier.hp for tier in repo.all()] == [10, 10, 16, 16, 24, 24, 40, 40, 40]
    assert repo.hp_for_round(7) == 40
    assert repo.hp_for_round(42) == 5


def test_bundled_arena_settings_match_default_rules() -> None:
    repo = ArenaSettingsRepository()

    assert repo.rules() == CombatRules()
    assert repo.pve_rules() == PVE_RULES
    assert repo.timing().turn_delay == pytest.approx(1.8)
    assert repo.timing().battle_start_delay == pytest.approx(1.5)


def test_bundled_monsters_include_one_hero() -> None:
    repo = MonstersRepository()

    assert repo.hero().name == "Daring Hero"
    assert repo.get("ripplefang").health == 80
    assert all(monster.role == "monster" for monster in repo.monsters())
    assert repo.get("wood-dummy").can_defend is False
    assert all(monster.can_defend for monster in repo.monsters() if monster.id != "wood-dummy")


def test_hp_tiers_reject_non_positive_hp(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "hp_tiers.json", {"default_hp": 5, "rounds": {"1": 0}})

    with pytest.raises(DataValidationError):
        HpTiersRepository(base_path=definitions_dir).hp_for_round(1)


def test_hp_tiers_reject_non_numeric_round(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "hp_tiers.json", {"default_hp": 5, "rounds": {"final": 40}})

    with pytest.raises(DataValidationError):
        HpTiersRepository(base_path=definitions_dir).all()


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError):
        MonstersRepository(base_path=definitions_dir).hero()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "arena.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError):
        ArenaSettingsRepository(base_path=definitions_dir).rules()


def test_monsters_require_exactly_one_hero(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "monsters.json", {"ram": {"name": "Ram", "health": 36}})

    with pytest.raises(DataValidationError):
        MonstersRepository(base_path=definitions_dir).all()


def test_arena_rules_override_and_validate(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "arena.json",
        {"rules": {"parry_reflects_critical_damage": True, "critical_damage": 9}, "timing": {"turn_delay_ms": 0}},
    )
    repo = ArenaSettingsRepository(base_path=definitions_dir)

    assert repo.rules().parry_reflects_critical_damage is True
    assert repo.rules().critical_damage == 9
    assert repo.timing().turn_delay == 0
    assert repo.timing().battle_start_delay_ms == 1500


@pytest.mark.parametrize(
    "rules",
    [{"critical_damage": "7"}, {"parry_reflects_critical_damage": 1}, {"block_roll": 8}, {"crit": 7}],
)
def test_arena_rules_reject_bad_values(tmp_path: Path, rules: dict) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "arena.json", {"rules": rules})

    with pytest.raises(DataValidationError):
        ArenaSettingsRepository(base_path=definitions_dir).rules()


def test_load_error_names_definition_kind_and_path(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError) as excinfo:
        MonstersRepository(base_path=definitions_dir).hero()

    assert excinfo.value.kind == "monsters"
    assert excinfo.value.path == definitions_dir / "monsters.json"
    assert str(excinfo.value).startswith("monsters definitions:")


def test_validation_error_names_kind_and_field(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "monsters.json",
        {"hero": {"name": "Hero", "health": 10, "role": "hero"}, "ram": {"name": "Ram", "health": True}},
    )

    with pytest.raises(DataValidationError) as excinfo:
        MonstersRepository(base_path=definitions_dir).all()

    assert excinfo.value.kind == "monsters"
    assert "monster 'ram' health" in str(excinfo.value)


def test_monster_can_defend_must_be_boolean(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "monsters.json",
        {
            "hero": {"name": "Hero", "health": 10, "role": "hero"},
            "post": {"name": "Post", "health": 5, "can_defend": "no"},
        },
    )

    with pytest.raises(DataValidationError):
        MonstersRepository(base_path=definitions_dir).all()


def test_pve_rules_section_overrides_preset(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "arena.json", {"pve_rules": {"dodge_roll": None, "block_roll": 2}})
    repo = ArenaSettingsRepository(base_path=definitions_dir)

    assert repo.pve_rules().dodge_roll is None
    assert repo.pve_rules().block_roll == 2
    assert repo.pve_rules().defence_die == 6
    assert repo.pve_rules().arms_stance is False
    assert repo.rules() == CombatRules()


def test_pve_rules_reject_clashing_faces(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "arena.json", {"pve_rules": {"block_roll": 6}})

    with pytest.raises(DataValidationError) as excinfo:
        ArenaSettingsRepository(base_path=definitions_dir).pve_rules()

    assert excinfo.value.kind == "arena settings"
