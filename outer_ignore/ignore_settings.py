"""Qt-aware ignore settings with change notifications."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PySide6.QtCore import QObject, Signal

from outer_ignore.logging_setup import get_logger
from outer_ignore.settings_models import (
    OUTER_IGNORE_RULES,
    OUTER_IGNORE_WRAPPER_HEIGHT,
    default_ignore_settings,
    default_settings_path,
)
from outer_ignore.settings_store import JsonSettingsStore

logger = get_logger(__name__)


class IgnoreSettings(QObject):
    """
    Process-wide ignore settings.

    Writers go through ``set_value``; every effective change is broadcast as
    ``settingChanged(key, new_value)``. Unchanged writes are silent.
    """

    settingChanged = Signal(str, object)

    def __init__(
        self,
        store: JsonSettingsStore | None = None,
        *,
        path: str | Path | None = None,
        persistent: bool = True,
        parent=None,
    ) -> None:
        super().__init__(parent)
        if store is None:
            store = JsonSettingsStore(
                Path(path) if path is not None else default_settings_path(),
                default_ignore_settings(),
                persistent=persistent,
            )
        self._store = store

    @classmethod
    def in_memory(cls, **overrides: Any) -> IgnoreSettings:
        settings = cls(persistent=False)
        settings.load()
        for key, value in overrides.items():
            settings._store.set(key, value)
        return settings

    @property
    def store(self) -> JsonSettingsStore:
        return self._store

    def load(self) -> None:
        before = self._store.values()
        self._store.load()
        self._emit_differences(before)

    def save(self) -> None:
        self._store.save()

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def set_value(self, key: str, value: Any) -> bool:
        if not self._store.set(key, value):
            return False
        logger.debug("Setting %s changed to %r", key, value)
        self.settingChanged.emit(key, value)
        return True

    def restore_defaults(self) -> None:
        before = self._store.values()
        for key, value in self._store.defaults.items():
            self._store.set(key, value)
        self._emit_differences(before)

    def is_outer_ignore_rules(self) -> bool:
        return bool(self._store.get(OUTER_IGNORE_RULES, True))

    def set_outer_ignore_rules(self, enabled: bool) -> bool:
        return self.set_value(OUTER_IGNORE_RULES, bool(enabled))

    def outer_ignore_wrapper_height(self) -> int:
        try:
            return max(40, int(self._store.get(OUTER_IGNORE_WRAPPER_HEIGHT, 100)))
        except (TypeError, ValueError):
            return 100

    def _emit_differences(self, before: dict[str, Any]) -> None:
        after = self._store.values()
        for key in sorted(set(before) | set(after)):
            if before.get(key) != after.get(key):
                self.settingChanged.emit(key, after.get(key))
