from __future__ import annotations

import pytest

from coordination.errors import InvalidRequest, LockError
from coordination.lock_manager import LockManager


def test_inspect_starts_unlocked(clock):
    locks = LockManager(30_000, clock=clock)

    snap = locks.inspect()
    assert snap == {"owner": None, "expires_at": 0, "valid": False, "ttl_ms": 30_000}


def test_alice_gets_lock_and_bob_is_refused(clock):
    locks = LockManager(30_000, clock=clock)

    r = locks.acquire_or_renew("alice")
    assert r["owner"] == "alice"
    assert r["granted"] is True
    assert r["expires_at"] == clock.now + 30_000

    r2 = locks.acquire_or_renew("bob")
    assert r2["owner"] == "alice"
    assert r2["granted"] is False
    assert r2["expires_at"] == r["expires_at"]


def test_renewal_by_holder_extends_deadline(clock):
    locks = LockManager(30_000, clock=clock)
    first = locks.acquire_or_renew("alice")

    for _ in range(5):
        clock.advance(10_000)
        r = locks.acquire_or_renew("alice")
        assert r["granted"] is True
        assert r["expires_at"] == clock.now + 30_000

    assert locks.inspect()["expires_at"] > first["expires_at"]
    assert locks.inspect()["valid"] is True


def test_expired_lock_goes_to_next_caller(clock):
    locks = LockManager(30_000, clock=clock)
    locks.acquire_or_renew("alice")

    clock.advance(29_999)
    assert locks.acquire_or_renew("bob")["granted"] is False

    clock.advance(1)
    assert locks.inspect()["valid"] is False
    r = locks.acquire_or_renew("bob")
    assert r["granted"] is True
    assert r["owner"] == "bob"


@pytest.mark.parametrize("client_id", ["", None])
def test_acquire_requires_client_id(clock, client_id):
    locks = LockManager(30_000, clock=clock)
    with pytest.raises(InvalidRequest):
        locks.acquire_or_renew(client_id)
    assert locks.inspect()["owner"] is None


def test_write_admission(clock):
    locks = LockManager(30_000, clock=clock)

    # Unlocked: anyone may write.
    locks.check_write_admission("bob")
    locks.check_write_admission("")

    locks.acquire_or_renew("alice")
    locks.check_write_admission("alice")
    with pytest.raises(LockError) as exc_info:
        locks.check_write_admission("bob")
    assert exc_info.value.lock["owner"] == "alice"

    clock.advance(30_000)
    locks.check_write_admission("bob")


def test_client_id_is_taken_verbatim(clock):
    locks = LockManager(30_000, clock=clock)

    r = locks.acquire_or_renew("   ")
    assert r["granted"] is True
    assert r["owner"] == "   "

    clock.advance(30_000)
    r = locks.acquire_or_renew(" alice ")
    assert r["owner"] == " alice "
    locks.check_write_admission(" alice ")
    with pytest.raises(LockError):
        locks.check_write_admission("alice")
