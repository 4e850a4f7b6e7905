from .core.codec import JsonNoteCodec
from .core.models import ACTIVE, ARCHIVE, Note, new_note, sort_for_display
from .infrastructure.filesystem import FileByteStore
from .infrastructure.memory_store import InMemoryByteStore
from .services.presenters import NotePresenter, NoteView, StoryPresenter, run_inline
from .services.repository import NoteRepository

__all__ = ['JsonNoteCodec',
           'ACTIVE',
           'ARCHIVE',
           'Note',
           'new_note',
           'sort_for_display',
           'FileByteStore',
           'InMemoryByteStore',
           'NotePresenter',
           'NoteView',
           'StoryPresenter',
           'run_inline',
           'NoteRepository',
           ]
