from __future__ import annotations

from typing import Sequence

from notestory.core.models import Note


class ByteStore:
    """
    Durable storage of named byte blobs ("slots").
    Knows nothing about notes; a missing slot reads as b"" once ensured.
    """

    def ensure_slot(self, name: str) -> None:
        raise NotImplementedError

    def read(self, name: str) -> bytes:
        raise NotImplementedError

    def write(self, name: str, data: bytes) -> None:
        """Replace the whole slot. On failure the previous contents stay readable."""
        raise NotImplementedError


class NoteCodec:
    def encode(self, notes: Sequence[Note]) -> bytes:
        raise NotImplementedError

    def decode(self, data: bytes) -> list[Note]:
        raise NotImplementedError
