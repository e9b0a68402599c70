"""Pure Python services behind the outer ignore controller."""

from .dialect_resolver import DialectResolver
from .dialects import GIT, GIT_EXCLUDE, MERCURIAL, MERGE_SOURCES, Dialect, DialectKind, merge_sources_for
from .file_dedup import dedup_file_ids
from .file_types import FileType, FileTypeRegistry
from .indexing_readiness import IndexingReadinessService, ScheduledTask
from .outer_file_collector import OuterFileCollector, OuterFileFetcherRegistry

__all__ = [
    "GIT",
    "GIT_EXCLUDE",
    "MERCURIAL",
    "MERGE_SOURCES",
    "Dialect",
    "DialectKind",
    "DialectResolver",
    "FileType",
    "FileTypeRegistry",
    "IndexingReadinessService",
    "OuterFileCollector",
    "OuterFileFetcherRegistry",
    "ScheduledTask",
    "dedup_file_ids",
    "merge_sources_for",
]
