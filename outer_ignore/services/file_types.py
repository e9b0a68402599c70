"""Declared file types, including ignore file types that embed a dialect."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from outer_ignore.services.dialects import GIT, GIT_EXCLUDE, MERCURIAL, Dialect


@dataclass(frozen=True)
class FileType:
    name: str
    dialect: Dialect | None = None

    @property
    def is_ignore_type(self) -> bool:
        return self.dialect is not None


PLAIN_TEXT = FileType("PlainText")

# file name -> generic dialect name
GENERIC_IGNORE_FILE_NAMES: dict[str, str] = {
    ".bzrignore": "bazaar",
    ".boringignore": "darcs",
    ".cfignore": "cloudfoundry",
    ".chefignore": "chef",
    ".cvsignore": "cvs",
    ".deployignore": "deploy",
    ".dockerignore": "docker",
    ".ebignore": "elasticbeanstalk",
    ".eslintignore": "eslint",
    ".flooignore": "floobits",
    ".gcloudignore": "gcloud",
    ".helmignore": "helm",
    ".ignore": "ignore",
    ".jpmignore": "jetpack",
    ".jshintignore": "jshint",
    ".mtn-ignore": "monotone",
    ".nodemonignore": "nodemon",
    ".npmignore": "npm",
    ".nuxtignore": "nuxt",
    ".p4ignore": "perforce",
    ".prettierignore": "prettier",
    ".rgignore": "ripgrep",
    ".stylelintignore": "stylelint",
    ".swagger-codegen-ignore": "swagger",
    ".tfignore": "tf",
    ".upignore": "up",
    ".vercelignore": "vercel",
}


def is_git_exclude_path(path: str) -> bool:
    parts = os.path.normpath(path).split(os.sep)
    return len(parts) >= 3 and parts[-3:] == [".git", "info", "exclude"]


class FileTypeRegistry:
    """Maps a file path to its declared type."""

    def __init__(self, extra_generic_names: Mapping[str, str] | None = None) -> None:
        self._types_by_name: dict[str, FileType] = {
            ".gitignore": FileType("GitIgnore", GIT),
            ".hgignore": FileType("HgIgnore", MERCURIAL),
        }
        names = dict(GENERIC_IGNORE_FILE_NAMES)
        if extra_generic_names:
            names.update(extra_generic_names)
        for file_name, dialect_name in names.items():
            self.register(file_name, FileType(f"{dialect_name}-ignore", Dialect.generic(dialect_name)))
        self._git_exclude_type = FileType("GitExclude", GIT_EXCLUDE)

    def register(self, file_name: str, file_type: FileType) -> None:
        key = str(file_name or "").strip()
        if not key:
            raise ValueError("File name cannot be empty.")
        self._types_by_name[key] = file_type

    def file_type_for(self, path: str) -> FileType:
        if is_git_exclude_path(path):
            return self._git_exclude_type
        return self._types_by_name.get(os.path.basename(path), PLAIN_TEXT)
