from __future__ import annotations

import threading
from pathlib import Path


class PathLockRegistry:
    """
    Hands out one lock per resolved file path so that two stores pointed at the
    same file never interleave a read with a replace.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._by_path: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = path.resolve()
        with self._guard:
            return self._by_path.setdefault(key, threading.Lock())


GLOBAL_PATH_LOCKS = PathLockRegistry()
