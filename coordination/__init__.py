from __future__ import annotations

from .coordinator import TournamentCoordinator
from .document_store import DocumentStore, parse_base_revision
from .errors import ConflictError, CoordinationError, InvalidRequest, LockError, StorageUnavailable
from .lock_manager import EditLock, LockManager
from .state import TournamentState, empty_state

__all__ = [
    "TournamentCoordinator",
    "DocumentStore",
    "parse_base_revision",
    "CoordinationError",
    "ConflictError",
    "InvalidRequest",
    "LockError",
    "StorageUnavailable",
    "EditLock",
    "LockManager",
    "TournamentState",
    "empty_state",
]
