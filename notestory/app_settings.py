from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

from notestory.settings import APP_NAME, DEFAULT_DATA_DIR


log = logging.getLogger(APP_NAME)


@dataclass(frozen=True)
class SettingsKeys:
    DATA_DIR: str = "storage/data_dir"
    UI_GEOMETRY: str = "ui/geometry"
    UI_LAST_TAB: str = "ui/last_tab"


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_int(settings: QSettings, key: str, default: int) -> int:
    try:
        return int(settings.value(key, default))
    except Exception:
        return default


def resolve_data_dir(settings: QSettings, cli_value: Path | None = None) -> Path:
    """
    Где лежат файлы заметок:
      1) --data-dir из командной строки
      2) сохранённое значение в QSettings
      3) DEFAULT_DATA_DIR
    Выбранный путь запоминается, чтобы следующий запуск без флага открыл то же место.
    """
    if cli_value is not None:
        data_dir = Path(cli_value).expanduser()
    else:
        stored = get_str(settings, SettingsKeys.DATA_DIR, "").strip()
        data_dir = Path(stored).expanduser() if stored else DEFAULT_DATA_DIR

    try:
        settings.setValue(SettingsKeys.DATA_DIR, str(data_dir))
    except Exception:
        log.warning("Failed to remember data dir in QSettings: %s", data_dir)
    return data_dir
