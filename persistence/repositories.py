from __future__ import annotations

import asyncio
from typing import Any, Mapping, Protocol

from coordination.coordinator import TournamentCoordinator


class AsyncTournamentRepository(Protocol):
    """
    What the HTTP layer needs from the coordination core.
    Errors from the core (InvalidRequest, LockError, ConflictError,
    StorageUnavailable) propagate unchanged.
    """

    async def get_lock(self) -> dict[str, Any]: ...
    async def acquire_lock(self, client_id: str) -> dict[str, Any]: ...

    async def get_state(self) -> dict[str, Any]: ...
    async def put_state(self, client_id: str, base_rev: Any, state: Mapping[str, Any]) -> dict[str, Any]: ...
    async def reset_state(self, client_id: str) -> dict[str, Any]: ...


class AsyncCoordinatorRepository(AsyncTournamentRepository):
    """
    Async wrapper around the coordinator.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O; the
    coordinator's own mutex serializes writes across those threads.
    """

    def __init__(self, coordinator: TournamentCoordinator) -> None:
        self._coordinator = coordinator

    @property
    def coordinator(self) -> TournamentCoordinator:
        return self._coordinator

    async def get_lock(self) -> dict[str, Any]:
        return self._coordinator.inspect_lock()

    async def acquire_lock(self, client_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._coordinator.acquire_lock, client_id)

    async def get_state(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._coordinator.read)

    async def put_state(self, client_id: str, base_rev: Any, state: Mapping[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._coordinator.write, client_id, base_rev, state)

    async def reset_state(self, client_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._coordinator.reset, client_id)
