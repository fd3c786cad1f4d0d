"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

_DEFAULT_PACING = "paced"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "RNGArena"
        return Path.home() / "RNGArena"
    return Path.home() / ".config" / "rng_arena"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_pacing(value: object) -> str:
    return "instant" if value == "instant" else _DEFAULT_PACING


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {"pacing": _DEFAULT_PACING}
    if not isinstance(raw, dict):
        return {"pacing": _DEFAULT_PACING}
    return {"pacing": _normalize_pacing(raw.get("pacing"))}


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"pacing": _normalize_pacing(config.get("pacing"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
