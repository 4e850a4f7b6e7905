from .filesystem import FileByteStore, atomic_write_bytes
from .memory_store import InMemoryByteStore

__all__ = ["FileByteStore",
           "atomic_write_bytes",
           "InMemoryByteStore",
           ]
