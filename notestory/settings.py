from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "notestory"

APP_DIR = Path(os.environ.get("NOTESTORY_HOME") or Path.home() / f".{APP_NAME}")
LOG_DIR = APP_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
DEFAULT_DATA_DIR = APP_DIR / "data"

# slot names == file stems inside the data dir
ACTIVE_SLOT = "active-notes"
ARCHIVE_SLOT = "archive-notes"
