"""Git-aware classification and outer file discovery."""

from __future__ import annotations

import os
from pathlib import Path

from outer_ignore.logging_setup import get_logger
from outer_ignore.project_context import ProjectContext, canonical_path
from outer_ignore.services.dialects import GIT, GIT_EXCLUDE
from outer_ignore.services.file_types import is_git_exclude_path
from outer_ignore.services.outer_file_collector import OuterFileFetcherRegistry
from outer_ignore.vcs.command_runner import VcsCommandRunner, VcsRunError

logger = get_logger(__name__)

GITIGNORE_FILE_NAME = ".gitignore"


class GitIgnoreSupport:
    def __init__(
        self,
        *,
        runner: VcsCommandRunner | None = None,
        git_bin: str = "git",
        available: bool | None = None,
    ) -> None:
        self._runner = runner or VcsCommandRunner()
        self._git_bin = git_bin
        self._available = available

    # ---------- Presence / classification ----------

    def is_available(self) -> bool:
        if self._available is None:
            self._available = self._runner.which(self._git_bin) is not None
        return self._available

    def is_ignore_file(self, path: str) -> bool:
        return os.path.basename(str(path)) == GITIGNORE_FILE_NAME

    def is_exclude_file(self, path: str) -> bool:
        return is_git_exclude_path(path)

    # ---------- Repository queries ----------

    def find_repo_root(self, path: str) -> str | None:
        out = self._git_output(path, ["rev-parse", "--show-toplevel"])
        return canonical_path(out) if out else None

    def find_git_dir(self, path: str) -> str | None:
        out = self._git_output(path, ["rev-parse", "--absolute-git-dir"])
        return canonical_path(out) if out else None

    def global_excludes_file(self, path: str) -> str | None:
        configured = self._git_output(path, ["config", "--get", "core.excludesFile"])
        if configured:
            candidate = Path(configured).expanduser()
            if not candidate.is_absolute():
                candidate = Path.home() / candidate
        else:
            xdg_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
            base = Path(xdg_home) if xdg_home else Path.home() / ".config"
            candidate = base / "git" / "ignore"
        return canonical_path(candidate) if candidate.is_file() else None

    # ---------- Outer files ----------

    def outer_files(self, project: ProjectContext) -> list[str]:
        files: list[str] = []
        global_file = self.global_excludes_file(project.project_root)
        if global_file:
            files.append(global_file)
        files.extend(self._ancestor_gitignores(project))
        return files

    def exclude_outer_files(self, project: ProjectContext) -> list[str]:
        git_dir = self.find_git_dir(project.project_root)
        if not git_dir:
            return []
        exclude = Path(git_dir) / "info" / "exclude"
        return [canonical_path(exclude)] if exclude.is_file() else []

    def register_fetchers(self, registry: OuterFileFetcherRegistry) -> None:
        registry.register(GIT, self.outer_files)
        registry.register(GIT_EXCLUDE, self.exclude_outer_files)

    def _ancestor_gitignores(self, project: ProjectContext) -> list[str]:
        """``.gitignore`` files above the project root but inside its repository, root first."""
        repo_root = self.find_repo_root(project.project_root)
        if not repo_root:
            return []
        project_root = Path(project.project_root)
        repo = Path(repo_root)
        if project_root == repo or repo not in project_root.parents:
            return []

        found: list[str] = []
        current = project_root.parent
        while True:
            candidate = current / GITIGNORE_FILE_NAME
            if candidate.is_file():
                found.append(canonical_path(candidate))
            if current == repo:
                break
            current = current.parent
        found.reverse()
        return found

    def _git_output(self, cwd: str, args: list[str]) -> str:
        if not self.is_available() or not os.path.isdir(cwd):
            return ""
        try:
            result = self._runner.run(executable=self._git_bin, cwd=cwd, args=args)
        except VcsRunError as exc:
            logger.debug("git %s failed in %s: %s (%s)", " ".join(args), cwd, exc, exc.kind)
            return ""
        if not result.ok:
            return ""
        return result.stdout.strip()
