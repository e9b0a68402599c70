"""Collects the outer ignore files of a dialect within a project."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from outer_ignore.logging_setup import get_logger
from outer_ignore.project_context import ProjectContext, canonical_path
from outer_ignore.services.dialects import Dialect, merge_sources_for
from outer_ignore.services.file_dedup import dedup_file_ids

logger = get_logger(__name__)

OuterFileFetcher = Callable[[ProjectContext], Iterable[str]]


class OuterFileFetcherRegistry:
    """Per-dialect fetchers answering "which outer files does this dialect see"."""

    def __init__(self) -> None:
        self._fetchers: dict[Dialect, OuterFileFetcher] = {}

    def register(self, dialect: Dialect, fetcher: OuterFileFetcher) -> None:
        self._fetchers[dialect] = fetcher

    def fetcher_for(self, dialect: Dialect) -> OuterFileFetcher | None:
        return self._fetchers.get(dialect)

    def fetch(self, project: ProjectContext, dialect: Dialect) -> list[str]:
        fetcher = self._fetchers.get(dialect)
        if fetcher is None:
            return []
        return [canonical_path(path) for path in fetcher(project) if str(path or "").strip()]


class OuterFileCollector:
    def __init__(self, registry: OuterFileFetcherRegistry) -> None:
        self._registry = registry

    def collect(self, project: ProjectContext, dialect: Dialect) -> tuple[str, ...]:
        files = self._registry.fetch(project, dialect)
        for source in merge_sources_for(dialect):
            files.extend(self._registry.fetch(project, source))
        outer_files = tuple(dedup_file_ids(files))
        logger.debug("Collected %d outer file(s) for %s in %s", len(outer_files), dialect, project.project_root)
        return outer_files
