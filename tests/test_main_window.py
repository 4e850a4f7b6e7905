import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime, timedelta, timezone

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QListWidget

from notestory.core.codec import JsonNoteCodec
from notestory.core.models import new_note
from notestory.infrastructure.memory_store import InMemoryByteStore
from notestory.services.presenters import NotePresenter, StoryPresenter, run_inline
from notestory.services.repository import NoteRepository
from notestory.ui.main_window import _ListViewAdapter

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


class FakeWindow:
    def __init__(self):
        self.busy = []
        self.detail_refreshes = 0

    def set_busy(self, busy):
        self.busy.append(busy)

    def refresh_detail(self):
        self.detail_refreshes += 1


def _repo(*titles):
    repo = NoteRepository(InMemoryByteStore(), JsonNoteCodec())
    for i, title in enumerate(titles):
        repo.create(new_note(title, now=T0 + timedelta(minutes=i)))
    return repo


def _adapter(repo, presenter_cls=NotePresenter):
    window = FakeWindow()
    adapter = _ListViewAdapter(
        window=window, listw=QListWidget(),
        presenter_cls=presenter_cls, repository=repo, dispatch=run_inline,
    )
    return adapter, window


def _texts(listw):
    return [listw.item(i).text() for i in range(listw.count())]


def test_adapter_owns_its_presenter(qapp):
    adapter, _ = _adapter(_repo())
    assert isinstance(adapter.presenter, NotePresenter)


def test_load_fills_the_list_newest_first(qapp):
    adapter, window = _adapter(_repo("A", "B"))

    adapter.presenter.load()

    assert _texts(adapter.listw) == ["○  B", "○  A"]
    assert adapter.listw.item(0).data(Qt.UserRole) == adapter.presenter.note_at(0).id
    assert window.busy == [True, False]
    assert window.detail_refreshes == 1


def test_add_and_toggle_patch_rows(qapp):
    repo = _repo("A")
    adapter, _ = _adapter(repo)
    adapter.presenter.load()

    adapter.presenter.add_note("B")
    assert _texts(adapter.listw) == ["○  B", "○  A"]
    assert adapter.listw.currentRow() == 0

    adapter.presenter.toggle_note(1)
    assert _texts(adapter.listw) == ["○  B"]

    story, _ = _adapter(repo, StoryPresenter)
    story.presenter.load()
    assert _texts(story.listw) == ["☑  A"]
