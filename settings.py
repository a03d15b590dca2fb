from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LOCK_TTL_MS = 30_000
DEFAULT_STATE_FILENAME = "pool-tournament-state.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Server
    host: str
    port: int

    # Persistence
    state_file: Path
    ui_dir: Path

    # Edit lock
    lock_ttl_ms: int

    # Debug
    debug_log_requests: bool


def get_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    port = _env_int("PORT", 3000)

    # Keep state outside the served folder by default: dev servers that watch the
    # UI directory would otherwise reload on every write.
    raw_state_file = os.getenv("STATE_FILE", "").strip()
    if raw_state_file:
        state_file = Path(raw_state_file).expanduser().resolve()
    else:
        state_file = Path(tempfile.gettempdir()) / DEFAULT_STATE_FILENAME

    raw_ui_dir = os.getenv("UI_DIR", "").strip()
    ui_dir = Path(raw_ui_dir).expanduser().resolve() if raw_ui_dir else Path(__file__).resolve().parent

    lock_ttl_ms = _env_int("LOCK_TTL_MS", DEFAULT_LOCK_TTL_MS)
    if lock_ttl_ms <= 0:
        lock_ttl_ms = DEFAULT_LOCK_TTL_MS

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)

    return Settings(
        host=host,
        port=port,
        state_file=state_file,
        ui_dir=ui_dir,
        lock_ttl_ms=lock_ttl_ms,
        debug_log_requests=debug_log_requests,
    )
