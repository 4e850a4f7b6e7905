# notestory/services/presenters.py

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable

from notestory.core.errors import NoteStoreError
from notestory.core.models import (
    ACTIVE,
    ARCHIVE,
    CollectionName,
    Note,
    new_note,
    sort_for_display,
    status_icon,
)
from notestory.services.repository import NoteRepository
from notestory.settings import APP_NAME

log = logging.getLogger(APP_NAME)

ERROR_TITLE = "Ошибка"

Dispatch = Callable[
    [Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]], None
]


class NoteView:
    """What a presenter needs from a screen. The screen owns the presenter, not vice versa."""

    def show_loading(self) -> None: ...
    def hide_loading(self) -> None: ...
    def reload_data(self) -> None: ...
    def did_insert_row(self, index: int) -> None: ...
    def did_delete_row(self, index: int) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...


def run_inline(
    fn: Callable[[], Any],
    on_done: Callable[[Any], None],
    on_error: Callable[[NoteStoreError], None],
) -> None:
    """Synchronous dispatcher: exactly one of on_done / on_error per call."""
    try:
        result = fn()
    except NoteStoreError as exc:
        on_error(exc)
        return
    on_done(result)


class CollectionPresenter:
    """
    Read model of one collection for one screen.

    `displayed` is a transient, display-ordered copy (newest first). It is rebuilt
    on load() and patched row by row after create / delete / toggle.
    """

    collection: CollectionName = ACTIVE

    def __init__(
        self,
        view: NoteView,
        repository: NoteRepository,
        *,
        dispatch: Dispatch = run_inline,
    ):
        # слабая ссылка: presenter не продлевает жизнь экрану
        self._view = weakref.ref(view)
        self._repository = repository
        self._dispatch = dispatch
        self.displayed: list[Note] = []

    # ───────────────────────── public API ─────────────────────────

    def load(self) -> None:
        self._call("show_loading")

        def done(notes: list[Note]) -> None:
            self.displayed = sort_for_display(notes)
            self._call("reload_data")
            self._call("hide_loading")

        def failed(exc: Exception) -> None:
            self._report(exc)
            self._call("hide_loading")

        self._dispatch(lambda: self._repository.load(self.collection), done, failed)

    def number_of_notes(self) -> int:
        return len(self.displayed)

    def note_at(self, index: int) -> Note:
        return self.displayed[index]

    def icon_for(self, is_complete: bool) -> str:
        return status_icon(is_complete)

    def delete_note(self, index: int) -> None:
        note = self._note_or_none(index, action="delete")
        if note is None:
            return

        self._dispatch(
            lambda: self._repository.delete(self.collection, note.id),
            lambda _removed: self._drop_row(note.id),
            self._report,
        )

    def toggle_note(self, index: int) -> None:
        """The note leaves this list; the sibling screen picks it up on its next load()."""
        note = self._note_or_none(index, action="toggle")
        if note is None:
            return

        self._dispatch(
            lambda: self._repository.toggle_complete(note.id),
            lambda _moved: self._drop_row(note.id),
            self._report,
        )

    # ───────────────────────── internal ─────────────────────────

    def _note_or_none(self, index: int, *, action: str) -> Note | None:
        if not 0 <= index < len(self.displayed):
            log.warning("%s: index %s out of range (rows=%d)", action, index, len(self.displayed))
            return None
        return self.displayed[index]

    def _drop_row(self, note_id: str) -> None:
        # индекс ищем заново: список мог измениться, пока операция шла в фоне
        for i, note in enumerate(self.displayed):
            if note.id == note_id:
                del self.displayed[i]
                self._call("did_delete_row", i)
                return

    def _report(self, exc: Exception) -> None:
        log.warning("%s failed: %s", type(self).__name__, exc)
        self._call("show_error", ERROR_TITLE, str(exc))

    def _call(self, method: str, *args) -> None:
        view = self._view()
        if view is None:
            return
        getattr(view, method)(*args)


class NotePresenter(CollectionPresenter):
    collection = ACTIVE

    def add_note(self, title: str, body: str = "") -> None:
        self._call("show_loading")
        note = new_note(title, body)

        def done(stored: Note) -> None:
            # новая заметка всегда самая свежая -> строка 0
            self.displayed.insert(0, stored)
            self._call("did_insert_row", 0)
            self._call("hide_loading")

        def failed(exc: Exception) -> None:
            self._call("hide_loading")
            self._report(exc)

        self._dispatch(lambda: self._repository.create(note), done, failed)


class StoryPresenter(CollectionPresenter):
    collection = ARCHIVE
