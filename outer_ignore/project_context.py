"""Project handle shared by the outer ignore services and controllers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def canonical_path(path: str | os.PathLike[str]) -> str:
    text = os.fspath(path)
    try:
        return str(Path(text).expanduser().resolve())
    except (OSError, RuntimeError):
        return os.path.abspath(os.path.expanduser(text))


@dataclass(frozen=True)
class ProjectContext:
    project_root: str
    name: str = ""

    @classmethod
    def for_root(cls, project_root: str | os.PathLike[str]) -> ProjectContext:
        root = canonical_path(project_root)
        return cls(project_root=root, name=os.path.basename(root) or root)

    def canonicalize(self, path: str | os.PathLike[str]) -> str:
        text = os.fspath(path)
        if not os.path.isabs(os.path.expanduser(text)):
            text = os.path.join(self.project_root, text)
        return canonical_path(text)

    def rel_to_project(self, path: str | os.PathLike[str]) -> str:
        target = self.canonicalize(path)
        try:
            rel = os.path.relpath(target, self.project_root)
        except ValueError:
            return target
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return target
        return rel
