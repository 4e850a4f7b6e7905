import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json
from datetime import datetime, timedelta, timezone

import pytest

from notestory.core.codec import JsonNoteCodec
from notestory.core.errors import DecodeError, EncodeError
from notestory.core.models import Note

T0 = datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)


def _notes():
    return [
        Note(id="a1", title="Купить молоко", body="", is_complete=False, created_at=T0),
        Note(id="b2", title="Call Bob", body="line 1\nline 2", is_complete=True,
             created_at=T0 + timedelta(hours=1)),
        Note(id="c3", title="naive", body="**md**", created_at=datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)),
    ]


def test_round_trip_keeps_order_and_fields():
    codec = JsonNoteCodec()
    notes = _notes()
    decoded = codec.decode(codec.encode(notes))

    assert [n.id for n in decoded] == ["a1", "b2", "c3"]
    assert all(a.same_fields(b) for a, b in zip(notes, decoded))


def test_encode_is_deterministic():
    codec = JsonNoteCodec()
    assert codec.encode(_notes()) == codec.encode(_notes())


def test_empty_blob_is_empty_list():
    codec = JsonNoteCodec()
    assert codec.decode(b"") == []
    assert codec.decode(b"  \n") == []


def test_empty_list_round_trip():
    codec = JsonNoteCodec()
    assert codec.decode(codec.encode([])) == []


def test_legacy_bare_list_is_accepted():
    raw = json.dumps([{
        "id": "x", "title": "t", "body": "", "is_complete": False,
        "created_at": T0.isoformat(),
    }]).encode("utf-8")
    notes = JsonNoteCodec().decode(raw)
    assert len(notes) == 1
    assert notes[0].created_at == T0


@pytest.mark.parametrize("raw", [
    b"not json",
    b"\xff\xfe\x00",
    b"42",
    b'{"format": "other", "version": 1, "notes": []}',
    b'{"format": "notestory", "version": 99, "notes": []}',
    b'{"format": "notestory", "version": 1, "notes": {}}',
    b'{"format": "notestory", "version": 1, "notes": ["x"]}',
    b"[" * 100000 + b"]" * 100000,
])
def test_malformed_documents_raise_decode_error(raw):
    with pytest.raises(DecodeError):
        JsonNoteCodec().decode(raw)


@pytest.mark.parametrize("override", [
    {"id": 5},
    {"title": None},
    {"is_complete": 1},
    {"created_at": "yesterday"},
    {"created_at": None},
])
def test_bad_note_fields_raise_decode_error(override):
    item = {"id": "x", "title": "t", "body": "", "is_complete": False,
            "created_at": T0.isoformat()}
    item.update(override)
    raw = json.dumps({"format": "notestory", "version": 1, "notes": [item]}).encode("utf-8")

    with pytest.raises(DecodeError):
        JsonNoteCodec().decode(raw)


def test_missing_field_names_index():
    raw = json.dumps({"format": "notestory", "version": 1, "notes": [{"id": "x"}]}).encode()
    with pytest.raises(DecodeError, match=r"notes\[0\]"):
        JsonNoteCodec().decode(raw)


def test_unrepresentable_note_raises_encode_error():
    bad = Note(id="x", title=None, created_at=T0)  # type: ignore[arg-type]
    with pytest.raises(EncodeError):
        JsonNoteCodec().encode([bad])


def test_lone_surrogate_raises_encode_error():
    bad = Note(id="x", title="bad \ud800 title", created_at=T0)
    with pytest.raises(EncodeError):
        JsonNoteCodec().encode([bad])


def test_naive_timestamp_is_read_as_utc():
    raw = json.dumps([{
        "id": "x", "title": "t", "body": "", "is_complete": False,
        "created_at": "2023-01-01T10:00:00",
    }]).encode("utf-8")
    note = JsonNoteCodec().decode(raw)[0]
    assert note.created_at == datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)
