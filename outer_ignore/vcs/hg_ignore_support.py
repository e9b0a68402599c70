"""Mercurial-aware classification and outer file discovery."""

from __future__ import annotations

import os
from pathlib import Path

from outer_ignore.logging_setup import get_logger
from outer_ignore.project_context import ProjectContext, canonical_path
from outer_ignore.services.dialects import MERCURIAL
from outer_ignore.services.outer_file_collector import OuterFileFetcherRegistry
from outer_ignore.vcs.command_runner import VcsCommandRunner, VcsRunError

logger = get_logger(__name__)

HGIGNORE_FILE_NAME = ".hgignore"


def parse_ui_ignore_entries(config_text: str) -> list[str]:
    """Extract ``ui.ignore`` and ``ui.ignore.<name>`` values from ``hg config ui`` output."""
    entries: list[str] = []
    for raw_line in str(config_text or "").splitlines():
        key, sep, value = raw_line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key != "ui.ignore" and not key.startswith("ui.ignore."):
            continue
        value = value.strip()
        if value:
            entries.append(value)
    return entries


class MercurialIgnoreSupport:
    def __init__(
        self,
        *,
        runner: VcsCommandRunner | None = None,
        hg_bin: str = "hg",
        available: bool | None = None,
    ) -> None:
        self._runner = runner or VcsCommandRunner()
        self._hg_bin = hg_bin
        self._available = available

    def is_available(self) -> bool:
        if self._available is None:
            self._available = self._runner.which(self._hg_bin) is not None
        return self._available

    def is_ignore_file(self, path: str) -> bool:
        return os.path.basename(str(path)) == HGIGNORE_FILE_NAME

    def outer_files(self, project: ProjectContext) -> list[str]:
        config_text = self._hg_output(project.project_root, ["config", "ui"])
        files: list[str] = []
        for entry in parse_ui_ignore_entries(config_text):
            candidate = Path(entry).expanduser()
            if not candidate.is_absolute():
                candidate = Path(project.project_root) / candidate
            if candidate.is_file():
                files.append(canonical_path(candidate))
        return files

    def register_fetchers(self, registry: OuterFileFetcherRegistry) -> None:
        registry.register(MERCURIAL, self.outer_files)

    def _hg_output(self, cwd: str, args: list[str]) -> str:
        if not self.is_available() or not os.path.isdir(cwd):
            return ""
        try:
            result = self._runner.run(executable=self._hg_bin, cwd=cwd, args=args)
        except VcsRunError as exc:
            logger.debug("hg %s failed in %s: %s (%s)", " ".join(args), cwd, exc, exc.kind)
            return ""
        return result.stdout if result.ok else ""
