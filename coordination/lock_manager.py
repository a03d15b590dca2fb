"""Advisory, self-expiring edit lock shared by every client of the server."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

from settings import DEFAULT_LOCK_TTL_MS

from .errors import InvalidRequest, LockError

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class EditLock:
    owner: str | None = None
    expires_at: int = 0

    def is_valid(self, now: int) -> bool:
        return bool(self.owner) and now < self.expires_at


class LockManager:
    """
    Grants a single renewable edit token to one client at a time.

    There is no release call and no sweeper: a lock stops counting once its
    deadline passes, and validity is recomputed from the clock on every look.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_LOCK_TTL_MS,
        *,
        clock: Clock = now_ms,
        mutex: threading.RLock | None = None,
    ) -> None:
        self._ttl_ms = int(ttl_ms)
        self._clock = clock
        self._mutex = mutex if mutex is not None else threading.RLock()
        self._lock = EditLock()

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def mutex(self) -> threading.RLock:
        return self._mutex

    def is_valid(self) -> bool:
        return self._lock.is_valid(self._clock())

    def inspect(self) -> dict[str, Any]:
        lock = self._lock
        return {
            "owner": lock.owner,
            "expires_at": lock.expires_at,
            "valid": lock.is_valid(self._clock()),
            "ttl_ms": self._ttl_ms,
        }

    def acquire_or_renew(self, client_id: str) -> dict[str, Any]:
        client_id = str(client_id or "")
        if not client_id:
            raise InvalidRequest("clientId required")

        with self._mutex:
            now = self._clock()
            current = self._lock
            if not current.is_valid(now) or current.owner == client_id:
                if current.owner != client_id:
                    logger.info("Edit lock granted to %s", client_id)
                self._lock = EditLock(owner=client_id, expires_at=now + self._ttl_ms)
                return {"owner": client_id, "expires_at": self._lock.expires_at, "valid": True, "granted": True}

            logger.info("Edit lock denied to %s (held by %s)", client_id, current.owner)
            return {"owner": current.owner, "expires_at": current.expires_at, "valid": True, "granted": False}

    def check_write_admission(self, client_id: str) -> None:
        """Raise LockError when someone other than `client_id` holds a valid lock."""
        lock = self._lock
        now = self._clock()
        if lock.is_valid(now) and lock.owner != client_id:
            raise LockError({"owner": lock.owner, "expires_at": lock.expires_at, "valid": True})
