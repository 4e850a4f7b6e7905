from __future__ import annotations

from pathlib import Path

from notestory.core.codec import JsonNoteCodec
from notestory.core.ports import ByteStore
from notestory.infrastructure.filesystem import FileByteStore
from notestory.infrastructure.memory_store import InMemoryByteStore
from notestory.services.repository import NoteRepository


def build_repository(data_dir: Path | None, *, in_memory: bool = False) -> NoteRepository:
    """Wire a repository to its storage. The only place that knows about paths."""
    store: ByteStore
    if in_memory or data_dir is None:
        store = InMemoryByteStore()
    else:
        store = FileByteStore(data_dir)
    return NoteRepository(store, JsonNoteCodec())
