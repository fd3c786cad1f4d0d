from __future__ import annotations

import json
from pathlib import Path

import pytest

from rngarena.domain.combat_rules import PVE_RULES
from rngarena.presentation.cli import app, config
from rngarena.services import create_pve_session


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path: Path) -> Path:
    config_path = tmp_path / "config.json"
    monkeypatch.setattr(config, "get_default_config_path", lambda: config_path)
    monkeypatch.delenv("RNGARENA_DEBUG", raising=False)
    return config_path


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "missing.json") == {"pacing": "paced"}


def test_load_config_ignores_garbage(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert config.load_config(path) == {"pacing": "paced"}


def test_save_config_round_trip_normalizes(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config.save_config({"pacing": "warp"}, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"pacing": "paced"}
    config.save_config({"pacing": "instant"}, path)
    assert config.load_config(path) == {"pacing": "instant"}


def test_pvp_command_prints_a_full_fight(capsys) -> None:
    sleeps: list[float] = []

    exit_code = app.main(["pvp", "Sir Roll", "Lady Luck", "--round", "3"], sleep=sleeps.append)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Sir Roll (16 HP) vs Lady Luck (16 HP)!" in out
    assert "HP remaining!" in out
    assert sleeps and sleeps[0] == pytest.approx(1.5)


def test_pvp_output_is_reproducible(capsys) -> None:
    app.main(["pvp", "Sir Roll", "Lady Luck", "--instant"])
    first = capsys.readouterr().out
    app.main(["pvp", "Sir Roll", "Lady Luck", "--instant"])
    second = capsys.readouterr().out

    assert first == second


def test_instant_pacing_from_saved_options(capsys) -> None:
    assert app.main(["options", "--pacing", "instant"]) == 0
    assert "pacing: instant" in capsys.readouterr().out
    sleeps: list[float] = []

    app.main(["pvp", "A", "B"], sleep=sleeps.append)

    assert sleeps == []


def test_pve_lists_monsters_without_id(capsys) -> None:
    assert app.main(["pve"]) == 0
    out = capsys.readouterr().out
    assert "ripplefang: Ripplefang (80 HP)" in out
    assert "Daring Hero" not in out


def test_pve_unknown_monster_is_usage_error(capsys) -> None:
    assert app.main(["pve", "dragon", "--instant"]) == 2
    assert "unknown monster 'dragon'" in capsys.readouterr().out


def test_pve_fight_with_seed(capsys) -> None:
    assert app.main(["pve", "wood-dummy", "--seed", "4", "--instant"]) == 0
    assert "Daring Hero (10 HP) vs Training Dummy (20 HP)!" in capsys.readouterr().out


def test_debug_mode_prints_rolls_and_log(monkeypatch, capsys) -> None:
    monkeypatch.setenv("RNGARENA_DEBUG", "1")
    app.main(["pvp", "A", "B", "--instant"])
    out = capsys.readouterr().out

    assert "[beat 1] A rolls" in out
    assert "=== Combat Log ===" in out
    assert "Beat 1: " in out


def test_tiers_command(capsys) -> None:
    assert app.main(["tiers"]) == 0
    out = capsys.readouterr().out
    assert "Round 7: 40 HP" in out
    assert "Other rounds: 5 HP" in out


def test_pvp_accepts_undecodable_name_from_argv(capsys) -> None:
    name = b"Sir\xffRoll".decode("utf-8", "surrogateescape")

    exit_code = app.main(["pvp", name, "Lady Luck", "--instant"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Sir?Roll (10 HP) vs Lady Luck (10 HP)!" in out
    assert "HP remaining!" in out


@pytest.mark.parametrize(("monster_id", "can_defend"), [("wood-dummy", False), ("raccoon", True)])
def test_pve_command_uses_pve_table(monkeypatch, capsys, monster_id: str, can_defend: bool) -> None:
    calls: list[dict] = []

    def _spy(*args, **kwargs):
        calls.append(kwargs)
        return create_pve_session(*args, **kwargs)

    monkeypatch.setattr(app, "create_pve_session", _spy)

    assert app.main(["pve", monster_id, "--seed", "11", "--instant"]) == 0
    assert calls[0]["rules"] == PVE_RULES
    assert calls[0]["monster_can_defend"] is can_defend
    assert "prepares to" not in capsys.readouterr().out


def test_pve_dummy_never_defends(monkeypatch, capsys) -> None:
    monkeypatch.setenv("RNGARENA_DEBUG", "1")

    app.main(["pve", "wood-dummy", "--seed", "2", "--instant"])

    out = capsys.readouterr().out
    assert "Training Dummy dodges" not in out
    assert "Training Dummy blocks" not in out
