"""Shared tournament document guarded by the edit lock and a revision check."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping

from json_store import decode_json, encode_json
from persistence.interfaces import DurableDocumentStore

from .errors import ConflictError, InvalidRequest, StorageUnavailable
from .lock_manager import LockManager
from .state import TournamentState, empty_state

logger = logging.getLogger(__name__)


def parse_base_revision(raw: Any) -> int:
    """
    Turn a client-supplied base revision (header string or JSON number) into an int.

    Raises InvalidRequest for anything that is not a finite integer.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidRequest("missing x-rev")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer():
            return int(raw)
        raise InvalidRequest("missing x-rev")
    if isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise InvalidRequest("missing x-rev") from None
        return parse_base_revision(value)
    raise InvalidRequest("missing x-rev")


class DocumentStore:
    """
    Holds the current tournament document behind optimistic concurrency control.

    Reads are unconditional. Writes and resets are admitted only when the caller
    holds the edit lock (or nobody does), and plain writes must also name the
    current revision as their base. Every admitted write replaces the whole
    document and bumps `rev` by exactly one.

    Writes run under the lock manager's mutex, so the
    admission -> load -> compare -> save sequence is one atomic step and
    acquire/renew cannot slip in between.
    """

    def __init__(self, durable: DurableDocumentStore, lock_manager: LockManager):
        self._durable = durable
        self._locks = lock_manager

    def read(self) -> dict[str, Any]:
        return TournamentState.from_disk_doc(self._load_raw()).to_disk_doc()

    def write(self, client_id: str, claimed_base_rev: Any, proposed: Mapping[str, Any]) -> dict[str, Any]:
        with self._locks.mutex:
            self._locks.check_write_admission(client_id)

            current = self.read()
            server_rev = current["rev"]

            try:
                base_rev = parse_base_revision(claimed_base_rev)
            except InvalidRequest as e:
                raise InvalidRequest(e.message, server_rev=server_rev) from None

            if not isinstance(proposed, Mapping):
                raise InvalidRequest("tournament state must be a JSON object", server_rev=server_rev)

            if base_rev != server_rev:
                logger.info("Conflict from %s: base rev %s, server rev %s", client_id or "-", base_rev, server_rev)
                raise ConflictError(server_rev, current)

            # Full replace: the client owns every field except the revision.
            nxt = {**proposed, "rev": server_rev + 1}
            self._save(nxt)
            logger.info("Write by %s committed rev %s", client_id or "-", nxt["rev"])
            return nxt

    def reset(self, client_id: str) -> dict[str, Any]:
        with self._locks.mutex:
            self._locks.check_write_admission(client_id)
            current = self.read()
            nxt = empty_state(rev=current["rev"] + 1)
            self._save(nxt)
            logger.info("Reset by %s committed rev %s", client_id or "-", nxt["rev"])
            return nxt

    def _load_raw(self) -> Any:
        try:
            return decode_json(self._durable.load_durable())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.exception("Failed to load tournament state")
            raise StorageUnavailable(f"failed to load tournament state: {e}") from e

    def _save(self, doc: dict[str, Any]) -> None:
        try:
            data = encode_json(doc)
        except (TypeError, ValueError) as e:
            raise InvalidRequest(f"tournament state is not JSON-serializable: {e}") from e
        try:
            self._durable.save_durable(data)
        except OSError as e:
            logger.exception("Failed to save tournament state")
            raise StorageUnavailable(f"failed to save tournament state: {e}") from e
