# notestory/services/task_runner.py

from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QObject, QThreadPool, Slot

from notestory.workers.repository_task import RepositoryTaskWorker


class QtTaskRunner(QObject):
    """
    Presenter dispatcher backed by a QThreadPool.

    Responsibilities:
    - run repository calls in the background, one at a time, in submission order
    - deliver the outcome on the GUI thread (slots of this QObject)
    - call exactly one callback per request, then forget it
    """

    def __init__(self, *, thread_pool: QThreadPool | None = None, parent: QObject | None = None):
        super().__init__(parent)

        if thread_pool is None:
            thread_pool = QThreadPool(self)
            thread_pool.setMaxThreadCount(1)
        self._pool = thread_pool

        self._req_id = 0
        self._pending: dict[int, tuple[Callable[[Any], None], Callable[[Exception], None]]] = {}

    # ───────────────────────── public API ─────────────────────────

    def __call__(
        self,
        fn: Callable[[], Any],
        on_done: Callable[[Any], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        self._req_id += 1
        req_id = self._req_id
        self._pending[req_id] = (on_done, on_error)

        worker = RepositoryTaskWorker(req_id=req_id, fn=fn)
        worker.signals.finished.connect(self._handle_finished)
        worker.signals.failed.connect(self._handle_failed)
        self._pool.start(worker)

    def pending_count(self) -> int:
        return len(self._pending)

    def wait_for_done(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    # ───────────────────────── internal ─────────────────────────

    @Slot(int, object)
    def _handle_finished(self, req_id: int, result: object) -> None:
        callbacks = self._pending.pop(req_id, None)
        if callbacks is None:
            return
        callbacks[0](result)

    @Slot(int, object)
    def _handle_failed(self, req_id: int, error: object) -> None:
        callbacks = self._pending.pop(req_id, None)
        if callbacks is None:
            return
        callbacks[1](error)
