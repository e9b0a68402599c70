"""Qt-aware controllers binding outer ignore banners to editor views."""

from .editor_host import EditorHost
from .outer_ignore_controller import (
    BindingLease,
    EditorBinding,
    EditorBindingManager,
    PendingResolution,
    ResolutionOutcome,
)
from .settings_bridge import SettingsBridge, SettingsSubscription

__all__ = [
    "BindingLease",
    "EditorBinding",
    "EditorBindingManager",
    "EditorHost",
    "PendingResolution",
    "ResolutionOutcome",
    "SettingsBridge",
    "SettingsSubscription",
]
