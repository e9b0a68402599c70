"""Controller attaching outer ignore banners to editor views of ignore files."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any

from PySide6.QtCore import QObject, Signal

from outer_ignore.ignore_settings import IgnoreSettings
from outer_ignore.logging_setup import get_logger
from outer_ignore.project_context import ProjectContext
from outer_ignore.services.dialect_resolver import DialectResolver
from outer_ignore.services.dialects import Dialect
from outer_ignore.services.file_types import FileTypeRegistry
from outer_ignore.services.indexing_readiness import IndexingReadinessService, ScheduledTask
from outer_ignore.services.outer_file_collector import OuterFileCollector, OuterFileFetcherRegistry
from outer_ignore.settings_models import OUTER_IGNORE_RULES
from outer_ignore.ui.controllers.editor_host import EditorHost
from outer_ignore.ui.controllers.settings_bridge import SettingsBridge, SettingsSubscription
from outer_ignore.vcs.git_ignore_support import GitIgnoreSupport
from outer_ignore.vcs.hg_ignore_support import MercurialIgnoreSupport

logger = get_logger(__name__)

BannerFactory = Callable[[ProjectContext, Dialect, tuple[str, ...]], Any]


class ResolutionOutcome(Enum):
    NO_DIALECT = "no_dialect"
    PENDING = "pending"
    CANCELLED = "cancelled"
    EMPTY = "empty"
    SELF_REFERENTIAL = "self_referential"
    DISABLED = "disabled"
    FAILED = "failed"
    NO_VIEWS = "no_views"
    BOUND = "bound"


class BindingLease:
    """Settings subscription and attached banner of one view, released together."""

    def __init__(
        self,
        *,
        host: EditorHost,
        bridge: SettingsBridge,
        view: Any,
        banner: Any,
        subscription: SettingsSubscription,
    ) -> None:
        self._host = host
        self._bridge = bridge
        self._view = view
        self._banner = banner
        self._subscription = subscription
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @property
    def subscription(self) -> SettingsSubscription:
        return self._subscription

    def release(self) -> bool:
        if self._released:
            return False
        self._released = True
        try:
            self._bridge.unsubscribe(self._subscription)
        finally:
            try:
                self._host.remove_bottom_component(self._view, self._banner)
            finally:
                dispose_banner(self._banner)
        return True


@dataclass(eq=False)
class EditorBinding:
    view: Any
    file_path: str
    dialect: Dialect
    outer_files: tuple[str, ...]
    banner: Any
    lease: BindingLease

    @property
    def active(self) -> bool:
        return not self.lease.released


@dataclass(eq=False)
class PendingResolution:
    file_path: str
    dialect: Dialect
    flag_enabled: bool
    watched_views: list[Any] = field(default_factory=list)
    closed_view_ids: set[int] = field(default_factory=set)
    task: ScheduledTask | None = None

    def is_closed(self, view: Any) -> bool:
        return id(view) in self.closed_view_ids

    def all_watched_closed(self) -> bool:
        return bool(self.watched_views) and all(self.is_closed(view) for view in self.watched_views)


def dispose_banner(banner: Any) -> None:
    for name in ("dispose", "deleteLater"):
        fn = getattr(banner, name, None)
        if callable(fn):
            fn()
            return


class EditorBindingManager(QObject):
    """
    Per-project lifecycle of outer ignore banners.

    A file-open event resolves the file's dialect right away, then waits for
    indexing to finish before gathering outer files and binding a banner to
    every open text editor view of the file. Closing a view releases its
    binding; closing every view while still waiting abandons the resolution.
    """

    bindingCreated = Signal(object)
    bindingReleased = Signal(object)
    resolutionFinished = Signal(str, str)

    def __init__(
        self,
        *,
        project: ProjectContext,
        host: EditorHost,
        resolver: DialectResolver,
        collector: OuterFileCollector,
        bridge: SettingsBridge,
        readiness: IndexingReadinessService,
        file_types: FileTypeRegistry | None = None,
        banner_factory: BannerFactory | None = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._project = project
        self._host = host
        self._resolver = resolver
        self._collector = collector
        self._bridge = bridge
        self._readiness = readiness
        self._file_types = file_types or FileTypeRegistry()
        self._banner_factory = banner_factory or self._default_banner
        self._pending: dict[str, PendingResolution] = {}
        self._bindings: dict[int, EditorBinding] = {}
        self._outcomes: dict[str, ResolutionOutcome] = {}
        self._disposed = False

    @classmethod
    def with_defaults(
        cls,
        *,
        project: ProjectContext,
        host: EditorHost,
        settings: IgnoreSettings,
        readiness: IndexingReadinessService,
        banner_factory: BannerFactory | None = None,
        parent=None,
    ) -> EditorBindingManager:
        git = GitIgnoreSupport()
        hg = MercurialIgnoreSupport()
        registry = OuterFileFetcherRegistry()
        git.register_fetchers(registry)
        hg.register_fetchers(registry)
        return cls(
            project=project,
            host=host,
            resolver=DialectResolver(git=git, mercurial=hg),
            collector=OuterFileCollector(registry),
            bridge=SettingsBridge(settings),
            readiness=readiness,
            banner_factory=banner_factory,
            parent=parent,
        )

    # ----------------------------- host events -----------------------------

    def connect_host_signals(self, host: object) -> None:
        file_opened = getattr(host, "fileOpened", None)
        if file_opened is not None and hasattr(file_opened, "connect"):
            file_opened.connect(self.file_opened)
        file_closed = getattr(host, "fileClosed", None)
        if file_closed is not None and hasattr(file_closed, "connect"):
            file_closed.connect(self.file_closed)

    def file_opened(self, file_path: str) -> ScheduledTask | None:
        if self._disposed:
            return None
        path = self._project.canonicalize(file_path)
        dialect = self._resolver.resolve(path, self._file_types.file_type_for(path))
        if dialect is None:
            self._finish(path, ResolutionOutcome.NO_DIALECT)
            return None

        existing = self._pending.get(path)
        if existing is not None and existing.task is not None and existing.task.pending:
            self._watch_views(existing)
            return existing.task

        pending = PendingResolution(file_path=path, dialect=dialect, flag_enabled=self._bridge.get_flag())
        self._pending[path] = pending
        self._outcomes[path] = ResolutionOutcome.PENDING
        self._watch_views(pending)
        pending.task = self._readiness.run_when_ready(partial(self._complete, pending), label=path)
        logger.debug("Resolved %s as %s; waiting for indexing", path, dialect)
        return pending.task

    def file_closed(self, file_path: str) -> None:
        path = self._project.canonicalize(file_path)
        if self._host.editors_for(path):
            return
        pending = self._pending.get(path)
        if pending is not None:
            self._cancel(pending)
        self._outcomes.pop(path, None)

    # ----------------------------- queries -----------------------------

    def binding_for(self, view: Any) -> EditorBinding | None:
        return self._bindings.get(id(view))

    def bindings(self) -> list[EditorBinding]:
        return list(self._bindings.values())

    def last_outcome(self, file_path: str) -> ResolutionOutcome | None:
        return self._outcomes.get(self._project.canonicalize(file_path))

    def has_pending(self, file_path: str) -> bool:
        return self._project.canonicalize(file_path) in self._pending

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for pending in list(self._pending.values()):
            self._cancel(pending)
        for binding in list(self._bindings.values()):
            self._release(binding)
        logger.debug("Outer ignore controller disposed for %s", self._project.project_root)

    # ----------------------------- pending resolution -----------------------------

    def _watch_views(self, pending: PendingResolution) -> None:
        watched = {id(view) for view in pending.watched_views}
        for view in self._host.editors_for(pending.file_path):
            if id(view) in watched:
                continue
            pending.watched_views.append(view)
            self._host.register_disposal(view, partial(self._pending_view_disposed, pending, view))

    def _pending_view_disposed(self, pending: PendingResolution, view: Any) -> None:
        pending.closed_view_ids.add(id(view))
        if pending.task is not None and pending.task.pending and pending.all_watched_closed():
            self._cancel(pending)

    def _cancel(self, pending: PendingResolution) -> None:
        if pending.task is not None:
            pending.task.cancel()
        if self._pending.get(pending.file_path) is pending:
            del self._pending[pending.file_path]
        self._finish(pending.file_path, ResolutionOutcome.CANCELLED)

    def _complete(self, pending: PendingResolution) -> None:
        path = pending.file_path
        if self._pending.get(path) is pending:
            del self._pending[path]
        if self._disposed:
            return

        try:
            outer_files = self._collector.collect(self._project, pending.dialect)
            views = list(self._host.editors_for(path))
        except Exception:
            logger.exception("Could not gather outer ignore files for %s", path)
            self._finish(path, ResolutionOutcome.FAILED)
            return
        if not outer_files:
            self._finish(path, ResolutionOutcome.EMPTY)
            return
        if path in outer_files:
            self._finish(path, ResolutionOutcome.SELF_REFERENTIAL)
            return
        if not pending.flag_enabled:
            self._finish(path, ResolutionOutcome.DISABLED)
            return

        bound = 0
        for view in views:
            if pending.is_closed(view) or id(view) in self._bindings:
                continue
            try:
                if not self._host.is_text_editor(view):
                    continue
                self._bind(view, pending, outer_files)
            except Exception:
                logger.exception("Could not attach outer ignore banner for %s", path)
                continue
            bound += 1
        self._finish(path, ResolutionOutcome.BOUND if bound else ResolutionOutcome.NO_VIEWS)

    def _finish(self, path: str, outcome: ResolutionOutcome) -> None:
        self._outcomes[path] = outcome
        logger.debug("Outer ignore resolution for %s: %s", path, outcome.value)
        self.resolutionFinished.emit(path, outcome.value)

    # ----------------------------- bindings -----------------------------

    def _bind(self, view: Any, pending: PendingResolution, outer_files: tuple[str, ...]) -> EditorBinding:
        banner = self._banner_factory(self._project, pending.dialect, outer_files)
        subscription: SettingsSubscription | None = None
        try:
            subscription = self._bridge.subscribe(partial(self._apply_setting, banner))
            # The flag may have been switched off while waiting for indexing.
            if not self._bridge.get_flag():
                self._apply_setting(banner, OUTER_IGNORE_RULES, False)
            self._host.add_bottom_component(view, banner)
        except Exception:
            if subscription is not None:
                self._bridge.unsubscribe(subscription)
            dispose_banner(banner)
            raise

        lease = BindingLease(host=self._host, bridge=self._bridge, view=view, banner=banner, subscription=subscription)
        binding = EditorBinding(
            view=view,
            file_path=pending.file_path,
            dialect=pending.dialect,
            outer_files=outer_files,
            banner=banner,
            lease=lease,
        )
        self._bindings[id(view)] = binding
        try:
            self._host.register_disposal(view, partial(self._release, binding))
        except Exception:
            self._release(binding)
            raise
        logger.debug("Bound %d outer file(s) to a view of %s", len(outer_files), pending.file_path)
        self.bindingCreated.emit(binding)
        return binding

    def _release(self, binding: EditorBinding) -> None:
        if self._bindings.get(id(binding.view)) is binding:
            del self._bindings[id(binding.view)]
        if binding.lease.release():
            logger.debug("Released outer ignore binding for %s", binding.file_path)
            self.bindingReleased.emit(binding)

    @staticmethod
    def _apply_setting(banner: Any, key: str, value: Any) -> None:
        if key == OUTER_IGNORE_RULES:
            banner.setVisible(bool(value))

    def _default_banner(self, project: ProjectContext, dialect: Dialect, outer_files: tuple[str, ...]) -> Any:
        from outer_ignore.ui.widgets.outer_ignore_banner import OuterIgnoreBanner

        return OuterIgnoreBanner(
            project=project,
            dialect=dialect,
            outer_files=outer_files,
            max_height=self._bridge.settings.outer_ignore_wrapper_height(),
        )
