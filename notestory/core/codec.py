"""
JSON codec for an ordered list of notes.

On-disk document:

    {
      "format": "notestory",
      "notes": [
        {"body": "...", "created_at": "2024-01-01T10:00:00+00:00",
         "id": "...", "is_complete": false, "title": "..."}
      ],
      "version": 1
    }

A bare JSON list of note objects (no envelope) is still accepted on read.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Sequence

from notestory.core.errors import DecodeError, EncodeError
from notestory.core.models import Note
from notestory.core.ports import NoteCodec

FORMAT_TAG = "notestory"
FORMAT_VERSION = 1

_STR_FIELDS = ("id", "title", "body")


class JsonNoteCodec(NoteCodec):
    def encode(self, notes: Sequence[Note]) -> bytes:
        items = [self._note_to_dict(i, n) for i, n in enumerate(notes)]
        doc = {"format": FORMAT_TAG, "version": FORMAT_VERSION, "notes": items}
        try:
            text = json.dumps(doc, ensure_ascii=False, indent=2, sort_keys=True)
            # одиночные суррогаты в строках проходят json.dumps, но не utf-8
            return (text + "\n").encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as exc:
            raise EncodeError(f"Не удалось закодировать заметки: {exc}") from exc

    def decode(self, data: bytes) -> list[Note]:
        # свежий слот: пустой файл == пустой список
        if not data or not data.strip():
            return []

        try:
            doc = json.loads(data.decode("utf-8"))
        except (ValueError, RecursionError) as exc:
            # ValueError covers UnicodeDecodeError and JSONDecodeError
            raise DecodeError(f"Повреждённый файл заметок: {exc}") from exc

        if isinstance(doc, list):
            raw_notes = doc
        elif isinstance(doc, dict):
            if doc.get("format") != FORMAT_TAG:
                raise DecodeError(f"Неизвестный формат: {doc.get('format')!r}")
            if doc.get("version") != FORMAT_VERSION:
                raise DecodeError(f"Неподдерживаемая версия: {doc.get('version')!r}")
            raw_notes = doc.get("notes")
            if not isinstance(raw_notes, list):
                raise DecodeError("Поле 'notes' должно быть списком")
        else:
            raise DecodeError(f"Ожидался объект или список, получено {type(doc).__name__}")

        return [self._note_from_dict(i, item) for i, item in enumerate(raw_notes)]

    # ───────────────────────── internal ─────────────────────────

    @staticmethod
    def _note_to_dict(index: int, note: Note) -> dict[str, Any]:
        for name in _STR_FIELDS:
            if not isinstance(getattr(note, name, None), str):
                raise EncodeError(f"notes[{index}].{name}: ожидалась строка")
        if not isinstance(note.is_complete, bool):
            raise EncodeError(f"notes[{index}].is_complete: ожидался bool")
        if not isinstance(note.created_at, datetime):
            raise EncodeError(f"notes[{index}].created_at: ожидался datetime")
        return {
            "id": note.id,
            "title": note.title,
            "body": note.body,
            "is_complete": note.is_complete,
            "created_at": note.created_at.isoformat(),
        }

    @staticmethod
    def _note_from_dict(index: int, item: Any) -> Note:
        if not isinstance(item, dict):
            raise DecodeError(f"notes[{index}]: ожидался объект")

        for name in _STR_FIELDS:
            if not isinstance(item.get(name), str):
                raise DecodeError(f"notes[{index}].{name}: отсутствует или не строка")
        if not isinstance(item.get("is_complete"), bool):
            raise DecodeError(f"notes[{index}].is_complete: отсутствует или не bool")

        raw_ts = item.get("created_at")
        if not isinstance(raw_ts, str):
            raise DecodeError(f"notes[{index}].created_at: отсутствует или не строка")
        try:
            created_at = datetime.fromisoformat(raw_ts)
        except ValueError as exc:
            raise DecodeError(f"notes[{index}].created_at: {exc}") from exc
        if created_at.tzinfo is None:
            # старые файлы без смещения: считаем UTC, иначе не сравнить с новыми заметками
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Note(
            id=item["id"],
            title=item["title"],
            body=item["body"],
            is_complete=item["is_complete"],
            created_at=created_at,
        )
