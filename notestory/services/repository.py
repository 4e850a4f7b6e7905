# notestory/services/repository.py

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from notestory.core.errors import (
    DecodeError,
    DuplicateNote,
    EncodeError,
    NotFound,
    ReadFailure,
    StorageIOError,
    WriteFailure,
)
from notestory.core.models import (
    ACTIVE,
    ARCHIVE,
    CollectionName,
    Note,
    other_collection,
    slot_for,
)
from notestory.core.ports import ByteStore, NoteCodec
from notestory.settings import APP_NAME

log = logging.getLogger(APP_NAME)


class NoteRepository:
    """
    Single owner of both note collections (active + archive).

    Responsibilities:
    - lazy load of each slot into an in-memory cache
    - every change is encoded and written BEFORE the cache is touched,
      so the cache only ever holds what is durably stored
    - toggle_complete moves a note between slots all-or-nothing

    Not thread-safe across instances / processes. Calls on one instance are
    serialised by an internal lock, so a background worker and the UI thread
    can share it.
    """

    def __init__(self, store: ByteStore, codec: NoteCodec):
        self._store = store
        self._codec = codec
        self._lock = threading.RLock()

        self._cache: dict[CollectionName, list[Note]] = {ACTIVE: [], ARCHIVE: []}
        self._loaded: dict[CollectionName, bool] = {ACTIVE: False, ARCHIVE: False}

        for collection in (ACTIVE, ARCHIVE):
            self._store.ensure_slot(slot_for(collection))

    # ───────────────────────── public API ─────────────────────────

    def load(self, collection: CollectionName) -> list[Note]:
        """Return the collection; storage is read only on the first call."""
        with self._lock:
            return list(self._ensure_loaded(collection, operation="load"))

    def create(self, note: Note) -> Note:
        with self._lock:
            active = self._ensure_loaded(ACTIVE, operation="create")
            archive = self._ensure_loaded(ARCHIVE, operation="create")
            if note in active or note in archive:
                raise DuplicateNote(note.id, operation="create", slot=slot_for(ACTIVE))

            stored = note if not note.is_complete else replace(note, is_complete=False)
            candidate = active + [stored]
            self._write(ACTIVE, candidate, operation="create")

            self._cache[ACTIVE] = candidate
            log.debug("Note created: id=%s active=%d", stored.id, len(candidate))
            return stored

    def delete(self, collection: CollectionName, note_id: str) -> Note:
        with self._lock:
            current = self._ensure_loaded(collection, operation="delete")
            index = _index_of(current, note_id)
            if index is None:
                log.warning("Delete of unknown note: id=%s collection=%s", note_id, collection)
                raise NotFound(note_id, operation="delete", slot=slot_for(collection))

            removed = current[index]
            candidate = current[:index] + current[index + 1:]
            self._write(collection, candidate, operation="delete")

            self._cache[collection] = candidate
            log.debug("Note deleted: id=%s collection=%s", note_id, collection)
            return removed

    def toggle_complete(self, note_id: str) -> Note:
        """
        Flip is_complete and move the note to the other collection.

        Write order: destination slot first, then source slot. If the source write
        fails, the destination slot is restored to its previous bytes. Caches are
        replaced only after both writes succeeded.
        """
        with self._lock:
            self._ensure_loaded(ACTIVE, operation="toggle_complete")
            self._ensure_loaded(ARCHIVE, operation="toggle_complete")

            source = self._locate(note_id)
            if source is None:
                log.warning("Toggle of unknown note: id=%s", note_id)
                raise NotFound(note_id, operation="toggle_complete")
            target = other_collection(source)

            src_list = self._cache[source]
            index = _index_of(src_list, note_id)
            moved = src_list[index].toggled()

            new_source = src_list[:index] + src_list[index + 1:]
            new_target = self._cache[target] + [moved]

            # encode both up front: an EncodeError must not leave a half-written move
            target_bytes = self._encode(target, new_target, operation="toggle_complete")
            source_bytes = self._encode(source, new_source, operation="toggle_complete")
            previous_target = self._encode(target, self._cache[target], operation="toggle_complete")

            self._put(target, target_bytes, operation="toggle_complete")
            try:
                self._put(source, source_bytes, operation="toggle_complete")
            except WriteFailure:
                self._restore(target, previous_target)
                raise

            self._cache[source] = new_source
            self._cache[target] = new_target
            log.debug("Note moved: id=%s %s -> %s", note_id, source, target)
            return moved

    def get(self, note_id: str) -> tuple[CollectionName, Note]:
        with self._lock:
            self._ensure_loaded(ACTIVE, operation="get")
            self._ensure_loaded(ARCHIVE, operation="get")
            collection = self._locate(note_id)
            if collection is None:
                raise NotFound(note_id, operation="get")
            notes = self._cache[collection]
            return collection, notes[_index_of(notes, note_id)]

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                c: len(self._ensure_loaded(c, operation="counts")) for c in (ACTIVE, ARCHIVE)
            }

    # ───────────────────────── internal ─────────────────────────

    def _ensure_loaded(self, collection: CollectionName, *, operation: str) -> list[Note]:
        slot = slot_for(collection)
        if self._loaded[collection]:
            return self._cache[collection]

        try:
            notes = self._codec.decode(self._store.read(slot))
        except (StorageIOError, DecodeError) as exc:
            log.error("Failed to load %s: %s", slot, exc)
            raise ReadFailure(exc, operation=operation, slot=slot) from exc

        self._cache[collection] = notes
        self._loaded[collection] = True
        log.info("Loaded %d notes from %s", len(notes), slot)
        return notes

    def _locate(self, note_id: str) -> CollectionName | None:
        for collection in (ACTIVE, ARCHIVE):
            if _index_of(self._cache[collection], note_id) is not None:
                return collection
        return None

    def _encode(self, collection: CollectionName, notes: list[Note], *, operation: str) -> bytes:
        try:
            return self._codec.encode(notes)
        except EncodeError as exc:
            log.error("Failed to encode %s: %s", collection, exc)
            raise WriteFailure(exc, operation=operation, slot=slot_for(collection)) from exc

    def _put(self, collection: CollectionName, data: bytes, *, operation: str) -> None:
        slot = slot_for(collection)
        try:
            self._store.write(slot, data)
        except StorageIOError as exc:
            log.error("Failed to write %s during %s: %s", slot, operation, exc)
            raise WriteFailure(exc, operation=operation, slot=slot) from exc

    def _write(self, collection: CollectionName, notes: list[Note], *, operation: str) -> None:
        self._put(collection, self._encode(collection, notes, operation=operation), operation=operation)

    def _restore(self, collection: CollectionName, data: bytes) -> None:
        slot = slot_for(collection)
        try:
            self._store.write(slot, data)
            log.warning("Rolled back %s after failed move", slot)
        except StorageIOError:
            # диск и кэш могли разойтись: следующий load перечитает оба слота
            log.critical("Rollback of %s failed; caches invalidated", slot, exc_info=True)
            self._loaded[ACTIVE] = False
            self._loaded[ARCHIVE] = False


def _index_of(notes: list[Note], note_id: str) -> int | None:
    for i, note in enumerate(notes):
        if note.id == note_id:
            return i
    return None
