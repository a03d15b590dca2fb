"""Errors raised by the edit-coordination core."""

from __future__ import annotations

from typing import Any


class CoordinationError(Exception):
    """Base class for every error the coordination core raises."""


class InvalidRequest(CoordinationError):
    """The caller sent a malformed client id, base revision or payload."""

    def __init__(self, message: str, server_rev: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.server_rev = server_rev


class LockError(CoordinationError):
    """Another client holds a valid edit lock; the caller is read-only."""

    def __init__(self, lock: dict[str, Any]) -> None:
        super().__init__(f"Edit lock held by {lock.get('owner')!r}")
        self.lock = lock


class ConflictError(CoordinationError):
    """The claimed base revision does not match the stored revision."""

    def __init__(self, server_rev: int, state: dict[str, Any]) -> None:
        super().__init__(f"Revision conflict: server is at rev {server_rev}")
        self.server_rev = server_rev
        self.state = state


class StorageUnavailable(CoordinationError):
    """The durable store could not be read, decoded or written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
