"""Flat JSON file backing the ignore settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from outer_ignore.logging_setup import get_logger

logger = get_logger(__name__)


class SettingsStoreError(RuntimeError):
    """Raised when the ignore settings file cannot be written."""


class JsonSettingsStore:
    """
    Top-level JSON object of ignore settings laid over their defaults.

    A file that cannot be read or parsed leaves the current values in place
    and is never rewritten by ``load``. Values whose JSON type differs from
    the default's are dropped in favour of the default.
    """

    def __init__(self, path: Path, defaults: Mapping[str, Any], *, persistent: bool = True) -> None:
        self.path = Path(path)
        self._defaults: dict[str, Any] = dict(defaults)
        self._values: dict[str, Any] = dict(self._defaults)
        self.persistent = bool(persistent)
        self.dirty = False
        self.last_error: str | None = None

    @property
    def defaults(self) -> dict[str, Any]:
        return dict(self._defaults)

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def load(self) -> dict[str, Any]:
        self.last_error = None
        if not self.persistent or not self.path.exists():
            self._values = dict(self._defaults)
            self.dirty = self.persistent
            return self.values()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.last_error = str(exc)
            logger.warning("Could not read ignore settings %s: %s", self.path, exc)
            return self.values()

        if not isinstance(raw, dict):
            self.last_error = f"Ignore settings in '{self.path}' must be a JSON object, found {type(raw).__name__}."
            logger.warning(self.last_error)
            raw = {}

        values = dict(self._defaults)
        for key, value in raw.items():
            default = self._defaults.get(key)
            if default is not None and type(value) is not type(default):
                logger.warning("Ignoring %s=%r in %s: expected %s", key, value, self.path, type(default).__name__)
                continue
            values[key] = value
        self._values = values
        self.dirty = False
        return self.values()

    def save(self) -> None:
        if not self.persistent:
            self.dirty = False
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError(f"Could not write ignore settings '{self.path}': {exc}") from exc
        self.dirty = False
        self.last_error = None

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        if not key:
            raise ValueError("Setting key cannot be empty.")
        if key in self._values and self._values[key] == value:
            return False
        self._values[key] = value
        self.dirty = True
        return True
