from __future__ import annotations

import logging
from pathlib import Path

from json_store import atomic_write_bytes, read_bytes

from .interfaces import DurableDocumentStore
from .locks import GLOBAL_PATH_LOCKS

logger = logging.getLogger(__name__)


class DiskDurableStore(DurableDocumentStore):
    """
    Stores a single document blob on disk at a fixed path.

    - Missing file loads as None.
    - Writes go to a temp file that replaces the target, so a failed save
      leaves the previous contents intact.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load_durable(self) -> bytes | None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            return read_bytes(self._path)

    def save_durable(self, data: bytes) -> None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            atomic_write_bytes(self._path, data)
        logger.debug("Saved %d bytes to %s", len(data), self._path)


class MemoryDurableStore(DurableDocumentStore):
    """Keeps the blob in process memory. Nothing survives a restart."""

    def __init__(self, data: bytes | None = None):
        self._data = data

    def load_durable(self) -> bytes | None:
        return self._data

    def save_durable(self, data: bytes) -> None:
        self._data = bytes(data)
