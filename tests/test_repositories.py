from __future__ import annotations

import asyncio

import pytest

from coordination.errors import ConflictError, LockError
from persistence.repositories import AsyncCoordinatorRepository


def test_async_repository_basic_flow(coordinator):
    async def _run():
        repo = AsyncCoordinatorRepository(coordinator)

        lock = await repo.get_lock()
        assert lock["valid"] is False

        granted = await repo.acquire_lock("alice")
        assert granted["granted"] is True

        state = await repo.get_state()
        assert state["rev"] == 0

        nxt = await repo.put_state("alice", state["rev"], {"players": ["A"]})
        assert nxt["rev"] == 1

        with pytest.raises(ConflictError):
            await repo.put_state("alice", 0, {"players": ["B"]})
        with pytest.raises(LockError):
            await repo.reset_state("bob")

        reset = await repo.reset_state("alice")
        assert reset["rev"] == 2
        assert reset["players"] == []

    asyncio.run(_run())


def test_async_concurrent_writes_one_wins(coordinator):
    async def _run():
        repo = AsyncCoordinatorRepository(coordinator)
        results = await asyncio.gather(
            repo.put_state("alice", 0, {"players": ["A"]}),
            repo.put_state("bob", 0, {"players": ["B"]}),
            return_exceptions=True,
        )
        accepted = [r for r in results if isinstance(r, dict)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(accepted) == 1 and len(conflicts) == 1
        assert conflicts[0].server_rev == 1

    asyncio.run(_run())
