from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from notestory.settings import APP_NAME, LOG_PATH

SESSION_ID = uuid.uuid4().hex[:8]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s | sid=%(session)s"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUPS = 3


class EnsureSessionFilter(logging.Filter):
    """Stamps records that came through a plain logger (library modules) with the session id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "session", None) is None:
            record.session = SESSION_ID
        return True


class SessionAdapter(logging.LoggerAdapter):
    """Logger used by the entry point and the UI: every line carries the session id."""

    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).setdefault("session", SESSION_ID)
        return msg, kwargs


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(EnsureSessionFilter())
    logger.addHandler(handler)


def setup_logging(
    *,
    console_level: int = logging.INFO,
    log_path: Path = LOG_PATH,
) -> logging.Logger:
    """
    One rotating file (DEBUG and up) plus the console. Idempotent.

    Modules below the entry point only call logging.getLogger(APP_NAME).
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if logger.handlers:
        return logger

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _attach(
        logger,
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"),
        logging.DEBUG,
    )
    _attach(logger, logging.StreamHandler(sys.stderr), console_level)

    logger.info("Log file: %s", log_path)
    return logger


log = SessionAdapter(logging.getLogger(APP_NAME), {})


def _qt_level(mode) -> int:
    from PySide6.QtCore import QtMsgType

    return {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }.get(mode, logging.WARNING)


def install_global_exception_hooks() -> None:
    """Route uncaught Python exceptions and Qt's own messages into the app log."""
    from PySide6.QtCore import qInstallMessageHandler

    def excepthook(exc_type, exc, tb):
        log.critical("Unhandled %s", exc_type.__name__, exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    def qt_handler(mode, context, message):
        origin = getattr(context, "file", None) or "qt"
        log.log(_qt_level(mode), "Qt: %s (%s:%s)", message, origin, getattr(context, "line", 0))

    sys.excepthook = excepthook
    qInstallMessageHandler(qt_handler)
