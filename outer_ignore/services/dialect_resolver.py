"""Maps an opened file to the ignore dialect that governs it."""

from __future__ import annotations

from typing import Protocol

from outer_ignore.services.dialects import GIT, GIT_EXCLUDE, MERCURIAL, Dialect
from outer_ignore.services.file_types import FileType


class GitFileClassifier(Protocol):
    def is_available(self) -> bool:
        ...

    def is_ignore_file(self, path: str) -> bool:
        ...

    def is_exclude_file(self, path: str) -> bool:
        ...


class MercurialFileClassifier(Protocol):
    def is_available(self) -> bool:
        ...

    def is_ignore_file(self, path: str) -> bool:
        ...


class DialectResolver:
    """
    First match wins:

    1. Git support classifies the file as a git ignore file.
    2. Git support classifies it as a git exclude file.
    3. Mercurial support classifies it as an hg ignore file.
    4. The declared file type embeds a dialect.

    Either VCS support may be missing (``None``) or report itself
    unavailable, in which case its branches are skipped.
    """

    def __init__(
        self,
        *,
        git: GitFileClassifier | None = None,
        mercurial: MercurialFileClassifier | None = None,
    ) -> None:
        self._git = git
        self._mercurial = mercurial

    def resolve(self, file_path: str, declared_type: FileType | None) -> Dialect | None:
        if _is_present(self._git):
            if self._git.is_ignore_file(file_path):
                return GIT
            if self._git.is_exclude_file(file_path):
                return GIT_EXCLUDE
        if _is_present(self._mercurial) and self._mercurial.is_ignore_file(file_path):
            return MERCURIAL
        if declared_type is not None and declared_type.dialect is not None:
            return declared_type.dialect
        return None


def _is_present(support: object | None) -> bool:
    if support is None:
        return False
    checker = getattr(support, "is_available", None)
    return bool(checker()) if callable(checker) else True
