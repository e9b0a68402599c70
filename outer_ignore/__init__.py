"""Outer ignore file loader: banners listing the rule files that also govern an opened ignore file."""

from .ignore_settings import IgnoreSettings
from .logging_setup import configure_logging
from .project_context import ProjectContext, canonical_path
from .services.dialects import GIT, GIT_EXCLUDE, MERCURIAL, Dialect, DialectKind
from .ui.controllers.outer_ignore_controller import EditorBinding, EditorBindingManager, ResolutionOutcome

__all__ = [
    "GIT",
    "GIT_EXCLUDE",
    "MERCURIAL",
    "Dialect",
    "DialectKind",
    "EditorBinding",
    "EditorBindingManager",
    "IgnoreSettings",
    "ProjectContext",
    "ResolutionOutcome",
    "canonical_path",
    "configure_logging",
]
