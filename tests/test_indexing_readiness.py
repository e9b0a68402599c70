from __future__ import annotations

from outer_ignore.services.indexing_readiness import IndexingReadinessService, ScheduledTask
from tests.fakes import ManualDispatcher


def test_callback_is_dispatched_not_run_inline_when_ready() -> None:
    dispatcher = ManualDispatcher()
    readiness = IndexingReadinessService(ready=True, dispatcher=dispatcher)
    calls: list[str] = []

    task = readiness.run_when_ready(lambda: calls.append("ran"))

    assert calls == []
    assert task.pending
    dispatcher.run_all()
    assert calls == ["ran"]
    assert task.done


def test_callbacks_wait_for_indexing_to_finish() -> None:
    dispatcher = ManualDispatcher()
    readiness = IndexingReadinessService(ready=False, dispatcher=dispatcher)
    calls: list[int] = []

    readiness.run_when_ready(lambda: calls.append(1))
    readiness.run_when_ready(lambda: calls.append(2))
    dispatcher.run_all()
    assert calls == []
    assert readiness.pending_count() == 2

    readiness.finish_indexing()
    dispatcher.run_all()
    assert calls == [1, 2]
    assert readiness.pending_count() == 0


def test_cancelled_task_never_runs() -> None:
    dispatcher = ManualDispatcher()
    readiness = IndexingReadinessService(ready=False, dispatcher=dispatcher)
    calls: list[str] = []

    task = readiness.run_when_ready(lambda: calls.append("late"))
    assert task.cancel()
    assert not task.cancel()
    readiness.finish_indexing()
    dispatcher.run_all()

    assert calls == []
    assert task.cancelled


def test_cancel_after_dispatch_still_blocks_body() -> None:
    dispatcher = ManualDispatcher()
    readiness = IndexingReadinessService(ready=True, dispatcher=dispatcher)
    calls: list[str] = []

    task = readiness.run_when_ready(lambda: calls.append("late"))
    task.cancel()
    dispatcher.run_all()

    assert calls == []


def test_ready_changed_signal_and_reentry() -> None:
    readiness = IndexingReadinessService(ready=True, dispatcher=ManualDispatcher())
    states: list[bool] = []
    readiness.readyChanged.connect(lambda ready: states.append(ready))

    readiness.begin_indexing()
    readiness.begin_indexing()
    readiness.finish_indexing()
    readiness.finish_indexing()

    assert states == [False, True]
    assert readiness.is_ready()


def test_task_runs_once() -> None:
    calls: list[int] = []
    task = ScheduledTask(lambda: calls.append(1))

    assert task.run()
    assert not task.run()
    assert calls == [1]
