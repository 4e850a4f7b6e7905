import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from notestory.core.errors import StorageIOError
from notestory.infrastructure import filesystem
from notestory.infrastructure.filesystem import FileByteStore, atomic_write_bytes


def _leftovers(directory):
    return [p.name for p in directory.iterdir() if ".tmp-" in p.name]


def test_ensure_slot_creates_empty_file(tmp_path):
    store = FileByteStore(tmp_path / "data")
    store.ensure_slot("active-notes")

    path = tmp_path / "data" / "active-notes.json"
    assert path.exists()
    assert store.read("active-notes") == b""


def test_ensure_slot_is_idempotent(tmp_path):
    store = FileByteStore(tmp_path)
    store.ensure_slot("active-notes")
    store.write("active-notes", b"payload")
    store.ensure_slot("active-notes")

    assert store.read("active-notes") == b"payload"


def test_missing_slot_reads_empty(tmp_path):
    assert FileByteStore(tmp_path).read("archive-notes") == b""


def test_write_replaces_contents(tmp_path):
    store = FileByteStore(tmp_path)
    store.write("s", b"first")
    store.write("s", b"second")

    assert store.read("s") == b"second"
    assert _leftovers(tmp_path) == []


def test_survives_new_store_instance(tmp_path):
    FileByteStore(tmp_path).write("s", "заметка".encode("utf-8"))
    assert FileByteStore(tmp_path).read("s").decode("utf-8") == "заметка"


def test_failed_write_keeps_previous_contents(tmp_path, monkeypatch):
    store = FileByteStore(tmp_path)
    store.write("s", b"old")

    def broken_fsync(fd):
        raise OSError("disk full")

    monkeypatch.setattr(filesystem.os, "fsync", broken_fsync)

    with pytest.raises(StorageIOError) as excinfo:
        store.write("s", b"new")

    assert excinfo.value.slot == "s"
    assert isinstance(excinfo.value.__cause__, OSError)
    monkeypatch.undo()
    assert store.read("s") == b"old"
    assert _leftovers(tmp_path) == []


def test_unreadable_slot_raises_storage_io_error(tmp_path):
    store = FileByteStore(tmp_path)
    store.slot_path("s").mkdir(parents=True)

    with pytest.raises(StorageIOError):
        store.read("s")


def test_write_onto_directory_raises_and_cleans_up(tmp_path):
    store = FileByteStore(tmp_path)
    store.slot_path("s").mkdir(parents=True)

    with pytest.raises(StorageIOError):
        store.write("s", b"x")
    assert _leftovers(tmp_path) == []


@pytest.mark.parametrize("name", ["", "../evil", "a/b", ".hidden"])
def test_invalid_slot_names_rejected(tmp_path, name):
    with pytest.raises(ValueError):
        FileByteStore(tmp_path).slot_path(name)


def test_atomic_write_creates_parent(tmp_path):
    target = tmp_path / "nested" / "dir" / "f.json"
    atomic_write_bytes(target, b"{}")
    assert target.read_bytes() == b"{}"
