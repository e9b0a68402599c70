from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, TypedDict

OUTER_IGNORE_RULES = "outer_ignore_rules"
OUTER_IGNORE_WRAPPER_HEIGHT = "outer_ignore_wrapper_height"

SETTINGS_DIR_NAME = ".tide"
SETTINGS_FILE_NAME = "ignore.json"


class IgnoreSettingsData(TypedDict, total=False):
    outer_ignore_rules: bool
    outer_ignore_wrapper_height: int


_DEFAULT_IGNORE_SETTINGS: IgnoreSettingsData = {
    OUTER_IGNORE_RULES: True,
    OUTER_IGNORE_WRAPPER_HEIGHT: 100,
}


def default_ignore_settings() -> dict[str, Any]:
    return deepcopy(dict(_DEFAULT_IGNORE_SETTINGS))


def default_settings_path(home: str | Path | None = None) -> Path:
    base = Path(home).expanduser() if home is not None else Path.home()
    return base / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME
