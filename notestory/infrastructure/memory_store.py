from __future__ import annotations

from collections import Counter

from notestory.core.errors import StorageIOError
from notestory.core.ports import ByteStore


class InMemoryByteStore(ByteStore):
    """
    ByteStore without a filesystem. Used by tests and by --in-memory runs.

    Failure injection:
      fail_reads / fail_writes  - slot names that always fail
      fail_next_write(name)     - only the next write to that slot fails
    A failed write never touches the stored bytes.
    """

    def __init__(self, initial: dict[str, bytes] | None = None):
        self.slots: dict[str, bytes] = dict(initial or {})
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()
        self._fail_once: Counter[str] = Counter()
        self.reads: Counter[str] = Counter()
        self.writes: Counter[str] = Counter()

    def fail_next_write(self, name: str, times: int = 1) -> None:
        self._fail_once[name] += times

    def ensure_slot(self, name: str) -> None:
        self.slots.setdefault(name, b"")

    def read(self, name: str) -> bytes:
        if name in self.fail_reads:
            raise StorageIOError("Simulated read failure", operation="read", slot=name)
        self.reads[name] += 1
        return self.slots.get(name, b"")

    def write(self, name: str, data: bytes) -> None:
        if name in self.fail_writes:
            raise StorageIOError("Simulated write failure", operation="write", slot=name)
        if self._fail_once[name] > 0:
            self._fail_once[name] -= 1
            raise StorageIOError("Simulated write failure", operation="write", slot=name)
        self.writes[name] += 1
        self.slots[name] = bytes(data)
