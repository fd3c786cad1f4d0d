"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Iterable

from rngarena.services.combat_session import CombatSession


def debug_enabled() -> bool:
    """Return True only when RNGARENA_DEBUG is explicitly set to '1'."""
    return os.getenv("RNGARENA_DEBUG") == "1"


def printable(text: str) -> str:
    """Replace characters the console cannot encode, such as lone surrogates from argv."""
    return text.encode("utf-8", "replace").decode("utf-8")


def echo(text: str) -> None:
    print(printable(text))


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    echo(f"\n=== {title} ===")


def render_lines(lines: Iterable[str]) -> None:
    for line in lines:
        echo(line)


def format_health_bar(current: int, maximum: int, *, width: int = 20) -> str:
    """Return a fixed-width text bar such as ``[#####-----] 5/10``."""
    shown = max(0, current)
    filled = round(width * shown / maximum) if maximum > 0 else 0
    return f"[{'#' * filled}{'-' * (width - filled)}] {shown}/{maximum}"


def format_status(session: CombatSession) -> str:
    """One-line health summary, with armed stances, for both fighters."""
    parts = []
    for side in ("left", "right"):
        bar = format_health_bar(session.get_health(side), session.get_max_health(side))
        stance = session.get_stance(side)
        suffix = f" ({stance.upper()} ready)" if stance else ""
        parts.append(f"{session.get_name(side)} {bar}{suffix}")
    return " | ".join(parts)
