from __future__ import annotations

from outer_ignore.services.dialect_resolver import DialectResolver
from outer_ignore.services.dialects import GIT, GIT_EXCLUDE, MERCURIAL, Dialect
from outer_ignore.services.file_types import PLAIN_TEXT, FileType, FileTypeRegistry
from tests.fakes import FakeGitSupport, FakeHgSupport


def test_git_ignore_file_maps_to_git_dialect() -> None:
    resolver = DialectResolver(git=FakeGitSupport(), mercurial=FakeHgSupport())

    assert resolver.resolve("/repo/.gitignore", FileType("GitIgnore", Dialect.generic("gitish"))) == GIT


def test_git_exclude_file_maps_to_git_exclude() -> None:
    resolver = DialectResolver(git=FakeGitSupport())

    assert resolver.resolve("/repo/.git/info/exclude", PLAIN_TEXT) == GIT_EXCLUDE


def test_mercurial_checked_after_git_misses() -> None:
    resolver = DialectResolver(git=FakeGitSupport(), mercurial=FakeHgSupport())

    assert resolver.resolve("/repo/.hgignore", PLAIN_TEXT) == MERCURIAL


def test_declared_type_used_when_git_present_but_not_matching() -> None:
    docker = Dialect.generic("docker")
    resolver = DialectResolver(git=FakeGitSupport(), mercurial=FakeHgSupport())

    assert resolver.resolve("/repo/.dockerignore", FileType("docker-ignore", docker)) == docker


def test_unavailable_supports_are_skipped() -> None:
    resolver = DialectResolver(git=FakeGitSupport(available=False), mercurial=FakeHgSupport(available=False))

    assert resolver.resolve("/repo/.gitignore", PLAIN_TEXT) is None
    assert resolver.resolve("/repo/.hgignore", PLAIN_TEXT) is None


def test_absent_git_falls_back_to_declared_type() -> None:
    registry = FileTypeRegistry()
    resolver = DialectResolver()

    assert resolver.resolve("/repo/.gitignore", registry.file_type_for("/repo/.gitignore")) == GIT
    assert resolver.resolve("/repo/.git/info/exclude", registry.file_type_for("/repo/.git/info/exclude")) == GIT_EXCLUDE


def test_plain_file_has_no_dialect() -> None:
    resolver = DialectResolver(git=FakeGitSupport(), mercurial=FakeHgSupport())

    assert resolver.resolve("/repo/README.md", PLAIN_TEXT) is None
    assert resolver.resolve("/repo/README.md", None) is None


def test_git_wins_when_both_supports_claim_the_file() -> None:
    class GreedyHg(FakeHgSupport):
        def is_ignore_file(self, path: str) -> bool:
            return True

    resolver = DialectResolver(git=FakeGitSupport(), mercurial=GreedyHg())

    assert resolver.resolve("/repo/.gitignore", PLAIN_TEXT) == GIT


def test_file_type_registry_knows_generic_ignore_files() -> None:
    registry = FileTypeRegistry(extra_generic_names={".customignore": "custom"})

    assert registry.file_type_for("/p/.npmignore").dialect == Dialect.generic("npm")
    assert registry.file_type_for("/p/.customignore").dialect == Dialect.generic("custom")
    assert registry.file_type_for("/p/main.py") is PLAIN_TEXT
    assert not PLAIN_TEXT.is_ignore_type
