from __future__ import annotations

import json

from coordination.coordinator import TournamentCoordinator
from json_store import decode_json, encode_json
from persistence.disk_store import DiskDurableStore


def test_missing_file_loads_as_none(state_file):
    store = DiskDurableStore(state_file)
    assert store.load_durable() is None
    assert not state_file.exists()


def test_save_creates_parent_and_replaces(state_file):
    store = DiskDurableStore(state_file)

    store.save_durable(b'{"rev": 1}')
    store.save_durable(b'{"rev": 2}')

    assert json.loads(state_file.read_text(encoding="utf-8")) == {"rev": 2}
    assert not state_file.with_suffix(".json.tmp").exists()


def test_encode_is_pretty_json_with_rev():
    data = encode_json({"players": ["A"], "rev": 3})
    assert data.decode("utf-8").startswith("{\n  ")
    assert decode_json(data) == {"players": ["A"], "rev": 3}
    assert decode_json(b"   ") is None
    assert decode_json(None) is None


def test_state_survives_restart_but_lock_does_not(test_settings, clock):
    first = TournamentCoordinator.from_settings(test_settings, clock=clock)
    first.acquire_lock("alice")
    first.write("alice", 0, {"players": ["A", "B"]})

    second = TournamentCoordinator.from_settings(test_settings, clock=clock)
    assert second.read()["players"] == ["A", "B"]
    assert second.read()["rev"] == 1
    assert second.inspect_lock()["valid"] is False
    assert second.acquire_lock("bob")["granted"] is True


def test_two_stores_on_same_path_share_file(state_file):
    a = DiskDurableStore(state_file)
    b = DiskDurableStore(state_file)
    a.save_durable(b'{"rev": 9}')
    assert b.load_durable() == b'{"rev": 9}'
