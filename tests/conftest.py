from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeClock:
    """Millisecond clock the tests advance by hand."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "state" / "pool-tournament-state.json"


@pytest.fixture
def test_settings(tmp_path: Path, state_file: Path):
    from settings import Settings

    return Settings(
        host="127.0.0.1",
        port=3000,
        state_file=state_file,
        ui_dir=tmp_path / "ui",
        lock_ttl_ms=30_000,
        debug_log_requests=True,
    )


@pytest.fixture
def coordinator(test_settings, clock):
    from coordination.coordinator import TournamentCoordinator

    return TournamentCoordinator.from_settings(test_settings, clock=clock)


@pytest.fixture
def client(test_settings, coordinator):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app(test_settings, coordinator))
