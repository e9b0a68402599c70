"""Ignore dialect identities and their per-dialect capabilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DialectKind(Enum):
    GIT = "git"
    GIT_EXCLUDE = "git_exclude"
    MERCURIAL = "mercurial"
    GENERIC = "generic"


@dataclass(frozen=True)
class Dialect:
    kind: DialectKind
    name: str = ""

    @classmethod
    def generic(cls, name: str) -> Dialect:
        text = str(name or "").strip().lower()
        if not text:
            raise ValueError("Generic dialect needs a name.")
        return cls(DialectKind.GENERIC, text)

    @property
    def label(self) -> str:
        if self.kind is DialectKind.GENERIC:
            return self.name
        return _LABELS[self.kind]

    def __str__(self) -> str:
        return self.label


GIT = Dialect(DialectKind.GIT)
GIT_EXCLUDE = Dialect(DialectKind.GIT_EXCLUDE)
MERCURIAL = Dialect(DialectKind.MERCURIAL)

_LABELS: dict[DialectKind, str] = {
    DialectKind.GIT: "Git",
    DialectKind.GIT_EXCLUDE: "Git exclude",
    DialectKind.MERCURIAL: "Mercurial",
}

# Dialects whose outer files are merged into another dialect's result.
MERGE_SOURCES: dict[DialectKind, tuple[Dialect, ...]] = {
    DialectKind.GIT: (GIT_EXCLUDE,),
}


def merge_sources_for(dialect: Dialect) -> tuple[Dialect, ...]:
    return MERGE_SOURCES.get(dialect.kind, ())
