from .codec import JsonNoteCodec
from .errors import (
    DecodeError,
    DuplicateNote,
    EncodeError,
    NoteStoreError,
    NotFound,
    ReadFailure,
    StorageIOError,
    WriteFailure,
)
from .models import ACTIVE, ARCHIVE, CollectionName, Note, new_note, sort_for_display
from .ports import ByteStore, NoteCodec

__all__ = ["JsonNoteCodec",
           "NoteStoreError",
           "StorageIOError",
           "DecodeError",
           "EncodeError",
           "NotFound",
           "DuplicateNote",
           "ReadFailure",
           "WriteFailure",
           "ACTIVE",
           "ARCHIVE",
           "CollectionName",
           "Note",
           "new_note",
           "sort_for_display",
           "ByteStore",
           "NoteCodec",
           ]
