from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def encode_json(payload: Any, *, indent: int = 2) -> bytes:
    """
    Serialize a JSON document to UTF-8 bytes (pretty-printed, trailing newline).
    """
    return (json.dumps(payload, indent=indent, ensure_ascii=False) + "\n").encode("utf-8")


def decode_json(raw: bytes | None) -> Any | None:
    """
    Parse UTF-8 JSON bytes.

    Returns None for absent or blank input. Invalid JSON raises
    json.JSONDecodeError; callers decide whether that is fatal.
    """
    if raw is None:
        return None
    text = raw.decode("utf-8")
    if not text.strip():
        return None
    return json.loads(text)


def read_bytes(path: Path) -> bytes | None:
    """Read a file, returning None when it does not exist."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)
