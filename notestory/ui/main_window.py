from __future__ import annotations

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QTabWidget,
    QTextBrowser,
)

from notestory.app_settings import SettingsKeys, get_int
from notestory.core.models import Note
from notestory.logging_setup import log
from notestory.services.markdown_renderer import MarkdownRenderer
from notestory.services.presenters import (
    CollectionPresenter,
    Dispatch,
    NotePresenter,
    NoteView,
    StoryPresenter,
)
from notestory.services.repository import NoteRepository
from notestory.ui.dialogs import build_add_note_dialog

TAB_NOTES = 0
TAB_STORY = 1


class _ListViewAdapter(NoteView):
    """NoteView over a QListWidget. The window keeps it alive; presenters only hold a weakref."""

    def __init__(
        self,
        *,
        window: "MainWindow",
        listw: QListWidget,
        presenter_cls: type[CollectionPresenter],
        repository: NoteRepository,
        dispatch: Dispatch,
    ):
        self._window = window
        self.listw = listw
        self.presenter = presenter_cls(self, repository, dispatch=dispatch)

    def _row_text(self, note: Note) -> str:
        return f"{self.presenter.icon_for(note.is_complete)}  {note.title}"

    def _make_item(self, index: int) -> QListWidgetItem:
        note = self.presenter.note_at(index)
        item = QListWidgetItem(self._row_text(note))
        item.setData(Qt.UserRole, note.id)
        return item

    def show_loading(self) -> None:
        self._window.set_busy(True)

    def hide_loading(self) -> None:
        self._window.set_busy(False)

    def reload_data(self) -> None:
        self.listw.blockSignals(True)
        try:
            self.listw.clear()
            for i in range(self.presenter.number_of_notes()):
                self.listw.addItem(self._make_item(i))
        finally:
            self.listw.blockSignals(False)
        self._window.refresh_detail()

    def did_insert_row(self, index: int) -> None:
        self.listw.insertItem(index, self._make_item(index))
        self.listw.setCurrentRow(index)

    def did_delete_row(self, index: int) -> None:
        item = self.listw.takeItem(index)
        del item
        self._window.refresh_detail()

    def show_error(self, title: str, message: str) -> None:
        QMessageBox.warning(self._window, title, message)


class MainWindow(QMainWindow):
    def __init__(
        self,
        *,
        repository: NoteRepository,
        settings: QSettings,
        dispatch: Dispatch,
    ):
        super().__init__()
        self.setWindowTitle("notestory")
        self._settings = settings
        self._busy = 0
        self.renderer = MarkdownRenderer()

        # UI

        self.tabs = QTabWidget()
        self.notes_list = QListWidget()
        self.story_list = QListWidget()
        self.tabs.addTab(self.notes_list, "Заметки")
        self.tabs.addTab(self.story_list, "История")

        self.detail = QTextBrowser()
        self.detail.setOpenExternalLinks(True)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(self.tabs)
        self.splitter.addWidget(self.detail)
        self.splitter.setStretchFactor(0, 2)
        self.splitter.setStretchFactor(1, 3)
        self.setCentralWidget(self.splitter)

        # presenters; adapters are owned here
        self._notes_view = _ListViewAdapter(
            window=self, listw=self.notes_list,
            presenter_cls=NotePresenter, repository=repository, dispatch=dispatch,
        )
        self._story_view = _ListViewAdapter(
            window=self, listw=self.story_list,
            presenter_cls=StoryPresenter, repository=repository, dispatch=dispatch,
        )
        self.notes: NotePresenter = self._notes_view.presenter
        self.story: StoryPresenter = self._story_view.presenter

        self._build_toolbar()

        # Signals
        self.tabs.currentChanged.connect(self._on_tab_changed)
        for listw in (self.notes_list, self.story_list):
            listw.currentRowChanged.connect(lambda _row: self.refresh_detail())
            listw.itemDoubleClicked.connect(lambda _it: self.toggle_current())

        geo = self._settings.value(SettingsKeys.UI_GEOMETRY)
        if geo:
            self.restoreGeometry(geo)

        last_tab = get_int(self._settings, SettingsKeys.UI_LAST_TAB, TAB_NOTES)
        if last_tab in (TAB_NOTES, TAB_STORY) and last_tab != self.tabs.currentIndex():
            self.tabs.setCurrentIndex(last_tab)  # -> _on_tab_changed -> load()
        else:
            self._current_presenter().load()

    def closeEvent(self, event):  # type: ignore[override]
        try:
            self._settings.setValue(SettingsKeys.UI_GEOMETRY, self.saveGeometry())
            self._settings.setValue(SettingsKeys.UI_LAST_TAB, self.tabs.currentIndex())
        except Exception:
            log.exception("Failed to save UI state to QSettings")
        super().closeEvent(event)

    def _build_toolbar(self) -> None:
        tb = self.addToolBar("Заметки")
        tb.setMovable(False)

        self.act_add = QAction("Добавить", self)
        self.act_add.setShortcut("Ctrl+N")
        self.act_add.triggered.connect(self.add_note_dialog)

        self.act_toggle = QAction("Выполнено / вернуть", self)
        self.act_toggle.setShortcut("Ctrl+Return")
        self.act_toggle.triggered.connect(self.toggle_current)

        self.act_delete = QAction("Удалить", self)
        self.act_delete.setShortcut("Del")
        self.act_delete.triggered.connect(self.delete_current)

        tb.addAction(self.act_add)
        tb.addAction(self.act_toggle)
        tb.addAction(self.act_delete)

    # ───────────────────────── actions ─────────────────────────

    def add_note_dialog(self) -> None:
        def submit(title: str, body: str) -> None:
            if self.tabs.currentIndex() != TAB_NOTES:
                self.tabs.setCurrentIndex(TAB_NOTES)
            self.notes.add_note(title, body)

        dlg = build_add_note_dialog(self, on_submit=submit)
        dlg.exec()

    def toggle_current(self) -> None:
        row = self._current_list().currentRow()
        if row < 0:
            return
        self._current_presenter().toggle_note(row)

    def delete_current(self) -> None:
        row = self._current_list().currentRow()
        if row < 0:
            return
        presenter = self._current_presenter()
        note = presenter.note_at(row)
        answer = QMessageBox.question(self, "Удаление", f"Удалить заметку «{note.title}»?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        presenter.delete_note(row)

    # ───────────────────────── view helpers ─────────────────────────

    def set_busy(self, busy: bool) -> None:
        self._busy = max(0, self._busy + (1 if busy else -1))
        enabled = self._busy == 0
        for act in (self.act_add, self.act_toggle, self.act_delete):
            act.setEnabled(enabled)
        self.statusBar().showMessage("" if enabled else "Загрузка…")

    def refresh_detail(self) -> None:
        row = self._current_list().currentRow()
        presenter = self._current_presenter()
        if 0 <= row < presenter.number_of_notes():
            self.detail.setHtml(self.renderer.render_note(presenter.note_at(row)))
        else:
            self.detail.setHtml(self.renderer.render_empty())

    def _on_tab_changed(self, index: int) -> None:
        # соседний экран не получает уведомлений о переносе: перечитываем при показе
        log.debug("Tab changed: %s", index)
        self._current_presenter().load()

    def _current_presenter(self) -> CollectionPresenter:
        return self.story if self.tabs.currentIndex() == TAB_STORY else self.notes

    def _current_list(self) -> QListWidget:
        return self.story_list if self.tabs.currentIndex() == TAB_STORY else self.notes_list
