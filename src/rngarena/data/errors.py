"""Errors raised while turning definition files into arena data."""
from __future__ import annotations

from pathlib import Path


class DataError(Exception):
    """
    A definition file could not be used.

    ``kind`` names the definition set ("monsters", "hp tiers", ...) so the
    console can say which file to fix without a traceback.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(f"{kind} definitions: {message}")
        self.kind = kind
        self.message = message


class DataLoadError(DataError):
    """The file is missing, unreadable or not JSON."""

    def __init__(self, kind: str, path: Path, reason: str) -> None:
        super().__init__(kind, f"{reason} ({path})")
        self.path = path


class DataValidationError(DataError):
    """The file parsed but a field is missing, mistyped or out of range."""
