from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)


def build_add_note_dialog(
    parent: QWidget,
    *,
    on_submit: Callable[[str, str], None],
) -> QDialog:
    """Dialog that collects a (title, body) pair. Empty title is refused here, not in the core."""
    dlg = QDialog(parent)
    dlg.setWindowTitle("Новая заметка")
    dlg.setModal(True)
    dlg.resize(480, 320)

    layout = QVBoxLayout(dlg)

    title_input = QLineEdit()
    title_input.setPlaceholderText("Заголовок…")
    layout.addWidget(title_input)

    body_input = QTextEdit()
    body_input.setPlaceholderText("Текст заметки (markdown, можно оставить пустым)")
    body_input.setAcceptRichText(False)
    layout.addWidget(body_input)

    def do_accept() -> None:
        title = title_input.text().strip()
        if not title:
            QMessageBox.warning(parent, "Новая заметка", "Заголовок не может быть пустым.")
            title_input.setFocus()
            return
        on_submit(title, body_input.toPlainText())
        dlg.accept()

    title_input.returnPressed.connect(do_accept)

    buttons = QHBoxLayout()
    btn_cancel = QPushButton("Отмена")
    btn_ok = QPushButton("Добавить")
    btn_ok.setDefault(True)
    btn_cancel.clicked.connect(dlg.reject)
    btn_ok.clicked.connect(do_accept)
    buttons.addStretch(1)
    buttons.addWidget(btn_cancel)
    buttons.addWidget(btn_ok)
    layout.addLayout(buttons)
    return dlg
