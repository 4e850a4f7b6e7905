# notestory/infrastructure/filesystem.py

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from notestory.core.errors import StorageIOError
from notestory.core.ports import ByteStore
from notestory.settings import APP_NAME

log = logging.getLogger(APP_NAME)

SLOT_SUFFIX = ".json"


# ───────────────────────── public API ─────────────────────────

def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    Readers see either the old file or the new one, never a partial write.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            log.warning("Failed to remove temp file %s", tmp_path)


class FileByteStore(ByteStore):
    """
    One file per slot: <root_dir>/<slot>.json
    Path selection is the caller's business; this class only sees slot names.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def slot_path(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid slot name: {name!r}")
        return self.root_dir / f"{name}{SLOT_SUFFIX}"

    def ensure_slot(self, name: str) -> None:
        path = self.slot_path(name)
        try:
            if path.exists():
                return
            atomic_write_bytes(path, b"")
            log.info("Created empty slot %s at %s", name, path)
        except OSError as exc:
            raise StorageIOError(
                f"Не удалось создать файл {path}: {exc}", operation="ensure_slot", slot=name
            ) from exc

    def read(self, name: str) -> bytes:
        path = self.slot_path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return b""
        except OSError as exc:
            raise StorageIOError(
                f"Не удалось прочитать файл {path}: {exc}", operation="read", slot=name
            ) from exc

    def write(self, name: str, data: bytes) -> None:
        path = self.slot_path(name)
        try:
            atomic_write_bytes(path, data)
        except OSError as exc:
            raise StorageIOError(
                f"Не удалось записать файл {path}: {exc}", operation="write", slot=name
            ) from exc
