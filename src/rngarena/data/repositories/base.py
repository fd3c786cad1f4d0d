"""Shared loading and field checking for the JSON-backed repositories."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Generic, Mapping, Type, TypeVar

from rngarena.data import paths
from rngarena.data.errors import DataLoadError, DataValidationError

T = TypeVar("T")
V = TypeVar("V")

_MISSING = object()


class RepositoryBase(Generic[T]):
    """
    Lazily reads one definition file and caches what ``_build`` makes of it.

    Subclasses name their definition ``kind``; every load or validation error
    they raise through ``_invalid`` and ``_field`` carries it.
    """

    kind = "arena"

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    @property
    def file_path(self) -> Path:
        return paths.get_definitions_path(self._base_path) / self._filename

    def _load_raw(self) -> dict[str, object]:
        path = self.file_path
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DataLoadError(self.kind, path, "file not found") from exc
        except OSError as exc:
            raise DataLoadError(self.kind, path, f"unreadable: {exc.strerror}") from exc
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataLoadError(self.kind, path, f"invalid JSON at line {exc.lineno}") from exc
        if not isinstance(raw, dict):
            raise self._invalid(f"expected a top-level object in {path.name}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert the raw document into typed definitions keyed by id."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            self._definitions = self._build(self._load_raw())

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    # -----------------------
    # Field checks
    # -----------------------
    def _invalid(self, message: str) -> DataValidationError:
        return DataValidationError(self.kind, message)

    def _section(self, raw: Mapping[str, object], key: str, context: str) -> dict[str, object]:
        """Return a nested object, treating an absent key as empty."""
        value = raw.get(key, {})
        if not isinstance(value, dict):
            raise self._invalid(f"{context} must be an object.")
        return value

    def _field(
        self,
        mapping: Mapping[str, object],
        key: str,
        expected: Type[V],
        context: str,
        *,
        default: object = _MISSING,
        nullable: bool = False,
    ) -> V:
        """
        Read ``mapping[key]`` as ``expected``.

        JSON booleans are not accepted where an int is expected. ``null`` is
        accepted only when ``nullable`` is set.
        """
        if key not in mapping:
            if default is _MISSING:
                raise self._invalid(f"{context} is required.")
            return default  # type: ignore[return-value]
        value = mapping[key]
        if value is None and nullable:
            return value  # type: ignore[return-value]
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise self._invalid(f"{context} must be of type {expected.__name__}.")
        return value
