from __future__ import annotations

from .disk_store import DiskDurableStore, MemoryDurableStore
from .interfaces import DurableDocumentStore

__all__ = [
    "DurableDocumentStore",
    "DiskDurableStore",
    "MemoryDurableStore",
]
