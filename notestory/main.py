# notestory/main.py
"""Entry point: parse args, configure logging, open the main window."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication, QMessageBox

from notestory.app_settings import resolve_data_dir
from notestory.bootstrap import build_repository
from notestory.core.errors import NoteStoreError
from notestory.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from notestory.services.task_runner import QtTaskRunner
from notestory.settings import APP_NAME
from notestory.ui.main_window import MainWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Notes with an archive of completed ones")
    p.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Folder with active-notes.json / archive-notes.json (remembered between runs)",
    )
    p.add_argument(
        "--in-memory",
        action="store_true",
        help="Do not touch the disk; everything is lost on exit",
    )
    p.add_argument("--debug", action="store_true", help="Verbose console logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(console_level=logging.DEBUG if args.debug else logging.INFO)
    install_global_exception_hooks()

    app = QApplication(sys.argv[:1])
    app.setOrganizationName(APP_NAME)
    app.setApplicationName(APP_NAME)
    settings = QSettings()

    data_dir = None if args.in_memory else resolve_data_dir(settings, args.data_dir)
    try:
        repository = build_repository(data_dir, in_memory=args.in_memory)
    except NoteStoreError as exc:
        log.error("Storage unavailable: %s", exc)
        QMessageBox.critical(None, "Ошибка", f"Хранилище недоступно:\n{exc}")
        return 1
    log.info("Storage: %s", "memory" if args.in_memory else data_dir)

    runner = QtTaskRunner(parent=app)
    win = MainWindow(repository=repository, settings=settings, dispatch=runner)
    win.resize(900, 600)
    win.show()
    log.info("Приложение запущено, SID=%s", SESSION_ID)

    code = app.exec()
    runner.wait_for_done()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
