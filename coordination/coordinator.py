from __future__ import annotations

import logging
from typing import Any, Mapping

from persistence.disk_store import DiskDurableStore
from persistence.interfaces import DurableDocumentStore
from settings import Settings

from .document_store import DocumentStore
from .lock_manager import Clock, LockManager, now_ms

logger = logging.getLogger(__name__)


class TournamentCoordinator:
    """
    The one service instance that owns the edit lock and the document.

    Request handlers get this injected instead of touching module globals.
    """

    def __init__(
        self,
        durable: DurableDocumentStore,
        *,
        lock_ttl_ms: int,
        clock: Clock = now_ms,
    ) -> None:
        self.locks = LockManager(lock_ttl_ms, clock=clock)
        self.documents = DocumentStore(durable, self.locks)

    @classmethod
    def from_settings(cls, settings: Settings, *, clock: Clock = now_ms) -> "TournamentCoordinator":
        logger.info("State file: %s", settings.state_file)
        return cls(DiskDurableStore(settings.state_file), lock_ttl_ms=settings.lock_ttl_ms, clock=clock)

    def inspect_lock(self) -> dict[str, Any]:
        return self.locks.inspect()

    def acquire_lock(self, client_id: str) -> dict[str, Any]:
        return self.locks.acquire_or_renew(client_id)

    def read(self) -> dict[str, Any]:
        return self.documents.read()

    def write(self, client_id: str, claimed_base_rev: Any, proposed: Mapping[str, Any]) -> dict[str, Any]:
        return self.documents.write(client_id, claimed_base_rev, proposed)

    def reset(self, client_id: str) -> dict[str, Any]:
        return self.documents.reset(client_id)
