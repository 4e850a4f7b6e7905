# notestory/workers/repository_task.py

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, Signal

from notestory.core.errors import NoteStoreError
from notestory.settings import APP_NAME

log = logging.getLogger(APP_NAME)


class RepositoryTaskSignals(QObject):
    """
    finished(req_id, result)
    failed(req_id, error)   # NoteStoreError, or any other exception raised by the call
    """
    finished = Signal(int, object)
    failed = Signal(int, object)


class RepositoryTaskWorker(QRunnable):
    """
    Runs one repository call off the GUI thread and emits exactly one signal.

    Exceptions raised in a pool thread never reach sys.excepthook, so every one of
    them is reported through `failed`; unexpected ones are logged with a traceback.
    """

    def __init__(self, *, req_id: int, fn: Callable[[], Any]):
        super().__init__()
        self.req_id = req_id
        self.fn = fn
        self.signals = RepositoryTaskSignals()

    def run(self) -> None:
        try:
            result = self.fn()
        except NoteStoreError as exc:
            self.signals.failed.emit(self.req_id, exc)
            return
        except Exception as exc:
            log.exception("Repository task %s crashed", self.req_id)
            self.signals.failed.emit(self.req_id, exc)
            return
        self.signals.finished.emit(self.req_id, result)
