"""
Note storage errors.

Low-level kinds (StorageIOError, DecodeError, EncodeError) come from the byte
store and the codec. NoteRepository wraps them into ReadFailure / WriteFailure
so callers learn which operation and which slot failed.
"""

from __future__ import annotations


class NoteStoreError(Exception):
    """Base exception for all note storage errors."""

    code = "NOTE_STORE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        slot: str | None = None,
    ) -> None:
        self.message = message
        self.operation = operation
        self.slot = slot
        super().__init__(self.message)

    def __str__(self) -> str:
        where = ", ".join(
            f"{k}={v}" for k, v in (("operation", self.operation), ("slot", self.slot)) if v
        )
        return f"{self.message} ({where})" if where else self.message


class StorageIOError(NoteStoreError):
    """Raised when the storage medium cannot be read or written."""

    code = "IO_ERROR"


class DecodeError(NoteStoreError):
    """Raised when stored bytes do not match the expected structure."""

    code = "DECODE_ERROR"


class EncodeError(NoteStoreError):
    """Raised when a note cannot be represented in the storage format."""

    code = "ENCODE_ERROR"


class NotFound(NoteStoreError):
    """Raised when an operation references an id absent from the targeted collection."""

    code = "NOT_FOUND"

    def __init__(self, note_id: str, *, operation: str | None = None, slot: str | None = None) -> None:
        self.note_id = note_id
        super().__init__(f"Заметка не найдена: {note_id}", operation=operation, slot=slot)


class DuplicateNote(NoteStoreError):
    """Raised when a created note reuses an id that already exists."""

    code = "DUPLICATE"

    def __init__(self, note_id: str, *, operation: str | None = None, slot: str | None = None) -> None:
        self.note_id = note_id
        super().__init__(f"Заметка уже существует: {note_id}", operation=operation, slot=slot)


class ReadFailure(NoteStoreError):
    """Repository-level read failure wrapping StorageIOError or DecodeError."""

    code = "READ_FAILURE"

    def __init__(self, cause: NoteStoreError, *, operation: str, slot: str) -> None:
        self.cause = cause
        super().__init__(
            f"Не удалось прочитать заметки: {cause.message}", operation=operation, slot=slot
        )


class WriteFailure(NoteStoreError):
    """Repository-level write failure wrapping StorageIOError or EncodeError."""

    code = "WRITE_FAILURE"

    def __init__(self, cause: NoteStoreError, *, operation: str, slot: str) -> None:
        self.cause = cause
        super().__init__(
            f"Не удалось сохранить заметки: {cause.message}", operation=operation, slot=slot
        )
