from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Iterable, Literal, TypeAlias

from notestory.settings import ACTIVE_SLOT, ARCHIVE_SLOT

CollectionName: TypeAlias = Literal["active", "archive"]

ACTIVE: CollectionName = "active"
ARCHIVE: CollectionName = "archive"

_SLOTS = {ACTIVE: ACTIVE_SLOT, ARCHIVE: ARCHIVE_SLOT}


@dataclass(frozen=True)
class Note:
    """
    Заметка. Равенство и хеш только по id: две версии одной заметки
    (до и после toggle) считаются одной и той же заметкой.
    """
    id: str
    title: str = field(compare=False)
    body: str = field(default="", compare=False)
    is_complete: bool = field(default=False, compare=False)
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )

    def toggled(self) -> Note:
        return replace(self, is_complete=not self.is_complete)

    def same_fields(self, other: Note) -> bool:
        return all(getattr(self, f.name) == getattr(other, f.name) for f in fields(self))


def generate_note_id() -> str:
    return uuid.uuid4().hex


def new_note(title: str, body: str = "", *, now: datetime | None = None) -> Note:
    created_at = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Note(
        id=generate_note_id(),
        title=(title or "").strip(),
        body=(body or "").strip(),
        is_complete=False,
        created_at=created_at,
    )


def sort_for_display(notes: Iterable[Note]) -> list[Note]:
    """Newest first. sorted() is stable, so equal timestamps keep storage order."""
    return sorted(notes, key=lambda n: n.created_at, reverse=True)


def slot_for(collection: str) -> str:
    try:
        return _SLOTS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection!r}") from None


def other_collection(collection: CollectionName) -> CollectionName:
    return ARCHIVE if collection == ACTIVE else ACTIVE


def status_icon(is_complete: bool) -> str:
    return "☑" if is_complete else "○"
