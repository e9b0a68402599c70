from __future__ import annotations

from pathlib import Path

import pytest

from outer_ignore.project_context import ProjectContext
from outer_ignore.services.dialects import GIT, GIT_EXCLUDE, MERCURIAL
from outer_ignore.services.outer_file_collector import OuterFileCollector, OuterFileFetcherRegistry
from outer_ignore.vcs.command_runner import VcsCommandRunner, VcsRunError, VcsRunResult
from outer_ignore.vcs.git_ignore_support import GitIgnoreSupport
from outer_ignore.vcs.hg_ignore_support import MercurialIgnoreSupport, parse_ui_ignore_entries


class ScriptedRunner(VcsCommandRunner):
    def __init__(self, outputs: dict[tuple[str, ...], str], *, fail: bool = False) -> None:
        super().__init__()
        self.outputs = outputs
        self.fail = fail
        self.calls: list[tuple[str, ...]] = []

    @staticmethod
    def which(executable: str) -> str | None:
        return f"/usr/bin/{executable}"

    def run(self, *, executable: str, cwd: str, args: list[str], timeout_seconds: int | None = None) -> VcsRunResult:
        key = tuple(args)
        self.calls.append(key)
        if self.fail:
            raise VcsRunError("boom", kind="timeout")
        if key not in self.outputs:
            return VcsRunResult(returncode=1, stdout="", stderr="unknown")
        return VcsRunResult(returncode=0, stdout=self.outputs[key] + "\n", stderr="")


@pytest.fixture
def layout(tmp_path: Path) -> dict[str, Path]:
    repo = tmp_path.resolve() / "repo"
    project = repo / "services" / "api"
    project.mkdir(parents=True)
    (repo / ".gitignore").write_text("*.log\n", encoding="utf-8")
    (repo / "services" / ".gitignore").write_text("build/\n", encoding="utf-8")
    (repo / ".git" / "info").mkdir(parents=True)
    (repo / ".git" / "info" / "exclude").write_text("scratch/\n", encoding="utf-8")
    global_ignore = tmp_path.resolve() / "global_gitignore"
    global_ignore.write_text(".DS_Store\n", encoding="utf-8")
    return {"repo": repo, "project": project, "global": global_ignore}


def _git_outputs(layout: dict[str, Path]) -> dict[tuple[str, ...], str]:
    return {
        ("rev-parse", "--show-toplevel"): str(layout["repo"]),
        ("rev-parse", "--absolute-git-dir"): str(layout["repo"] / ".git"),
        ("config", "--get", "core.excludesFile"): str(layout["global"]),
    }


def test_git_outer_files_are_global_then_ancestors(layout: dict[str, Path]) -> None:
    support = GitIgnoreSupport(runner=ScriptedRunner(_git_outputs(layout)))
    project = ProjectContext.for_root(layout["project"])

    assert support.outer_files(project) == [
        str(layout["global"]),
        str(layout["repo"] / ".gitignore"),
        str(layout["repo"] / "services" / ".gitignore"),
    ]
    assert support.exclude_outer_files(project) == [str(layout["repo"] / ".git" / "info" / "exclude")]


def test_git_support_feeds_collector_merge(layout: dict[str, Path]) -> None:
    support = GitIgnoreSupport(runner=ScriptedRunner(_git_outputs(layout)))
    registry = OuterFileFetcherRegistry()
    support.register_fetchers(registry)
    project = ProjectContext.for_root(layout["project"])

    result = OuterFileCollector(registry).collect(project, GIT)

    assert result[-1] == str(layout["repo"] / ".git" / "info" / "exclude")
    assert len(result) == 4
    assert registry.fetcher_for(GIT_EXCLUDE) is not None


def test_git_falls_back_to_xdg_ignore(layout: dict[str, Path], tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    xdg = tmp_path / "xdg"
    (xdg / "git").mkdir(parents=True)
    (xdg / "git" / "ignore").write_text("*.swp\n", encoding="utf-8")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    outputs = _git_outputs(layout)
    del outputs[("config", "--get", "core.excludesFile")]
    support = GitIgnoreSupport(runner=ScriptedRunner(outputs))

    assert support.global_excludes_file(str(layout["project"])) == str((xdg / "git" / "ignore").resolve())


def test_git_errors_mean_no_outer_files(layout: dict[str, Path]) -> None:
    support = GitIgnoreSupport(runner=ScriptedRunner({}, fail=True))
    project = ProjectContext.for_root(layout["project"])

    assert support.exclude_outer_files(project) == []
    assert support.find_repo_root(str(layout["project"])) is None


def test_unavailable_git_runs_nothing(layout: dict[str, Path]) -> None:
    runner = ScriptedRunner(_git_outputs(layout))
    support = GitIgnoreSupport(runner=runner, available=False)

    assert support.exclude_outer_files(ProjectContext.for_root(layout["project"])) == []
    assert runner.calls == []


def test_git_classification() -> None:
    support = GitIgnoreSupport(available=True)

    assert support.is_ignore_file("/r/sub/.gitignore")
    assert not support.is_ignore_file("/r/sub/gitignore")
    assert support.is_exclude_file("/r/.git/info/exclude")
    assert not support.is_exclude_file("/r/info/exclude")


def test_parse_ui_ignore_entries() -> None:
    text = "ui.username=me\nui.ignore=~/.hgignore_global\nui.ignore.extra = /etc/hgignore\nui.ignored=nope\n"

    assert parse_ui_ignore_entries(text) == ["~/.hgignore_global", "/etc/hgignore"]


def test_mercurial_outer_files_keep_existing_entries(tmp_path: Path) -> None:
    root = tmp_path.resolve()
    project_dir = root / "hgproject"
    project_dir.mkdir()
    shared = root / "shared.hgignore"
    shared.write_text("syntax: glob\n*.orig\n", encoding="utf-8")
    (project_dir / "local.hgignore").write_text("*.tmp\n", encoding="utf-8")
    runner = ScriptedRunner({("config", "ui"): f"ui.ignore={shared}\nui.ignore.local=local.hgignore\nui.ignore.gone=/missing"})
    support = MercurialIgnoreSupport(runner=runner)
    registry = OuterFileFetcherRegistry()
    support.register_fetchers(registry)

    project = ProjectContext.for_root(project_dir)

    assert registry.fetch(project, MERCURIAL) == [str(shared), str(project_dir / "local.hgignore")]
    assert support.is_ignore_file(str(project_dir / ".hgignore"))
