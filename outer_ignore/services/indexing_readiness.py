"""Run-when-ready scheduling tied to the project's background indexing."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from outer_ignore.logging_setup import get_logger

logger = get_logger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def qt_dispatcher(fn: Callable[[], None]) -> None:
    QTimer.singleShot(0, fn)


class ScheduledTask:
    """One deferred callback; ``cancel()`` stops it from ever running."""

    def __init__(self, callback: Callable[[], None], *, label: str = "") -> None:
        self._callback: Callable[[], None] | None = callback
        self.label = label
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._done)

    def cancel(self) -> bool:
        if not self.pending:
            return False
        self._cancelled = True
        self._callback = None
        return True

    def run(self) -> bool:
        if not self.pending:
            return False
        callback = self._callback
        self._callback = None
        self._done = True
        if callback is not None:
            callback()
        return True


class IndexingReadinessService(QObject):
    """
    Defers callbacks until background indexing finishes.

    Callbacks never run inside ``run_when_ready``: they are handed to the
    dispatcher, which by default posts them to the Qt event loop.
    """

    readyChanged = Signal(bool)

    def __init__(self, *, ready: bool = True, dispatcher: Dispatcher | None = None, parent=None) -> None:
        super().__init__(parent)
        self._ready = bool(ready)
        self._dispatch = dispatcher or qt_dispatcher
        self._queue: list[ScheduledTask] = []

    def is_ready(self) -> bool:
        return self._ready

    def begin_indexing(self) -> None:
        if not self._ready:
            return
        self._ready = False
        logger.debug("Indexing started; deferring ready callbacks")
        self.readyChanged.emit(False)

    def finish_indexing(self) -> None:
        if self._ready:
            return
        self._ready = True
        logger.debug("Indexing finished; releasing %d queued callback(s)", len(self._queue))
        self.readyChanged.emit(True)
        self._flush()

    def run_when_ready(self, callback: Callable[[], None], *, label: str = "") -> ScheduledTask:
        task = ScheduledTask(callback, label=label)
        if self._ready:
            self._dispatch(task.run)
        else:
            self._queue.append(task)
        return task

    def pending_count(self) -> int:
        self._queue = [task for task in self._queue if task.pending]
        return len(self._queue)

    def _flush(self) -> None:
        queued, self._queue = self._queue, []
        for task in queued:
            if task.pending:
                self._dispatch(task.run)
