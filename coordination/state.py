from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TournamentState(BaseModel):
    """
    The shared bracket document as stored on disk:
      { "players": [...], "mode": ..., "groups": ..., "matches": [...], "winner": ..., "rev": 0 }

    Only `rev` is interpreted. The other known fields exist so a fresh or
    partial document reads back with defaults; unknown fields pass through.
    """

    model_config = ConfigDict(extra="allow")

    players: Any = Field(default_factory=list)
    mode: Any = None
    groups: Any = None
    matches: Any = Field(default_factory=list)
    winner: Any = None
    rev: int = 0

    @field_validator("rev", mode="before")
    @classmethod
    def _coerce_rev(cls, value: Any) -> int:
        # Anything that is not a usable number reads as a fresh document.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        # Revisions are non-negative integers; a hand-edited negative or fractional
        # value is clamped to 0 or truncated rather than rejected.
        return max(int(value), 0)

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any] | None) -> "TournamentState":
        return cls.model_validate(dict(doc) if isinstance(doc, Mapping) else {})

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def empty_state(rev: int = 0) -> dict[str, Any]:
    return TournamentState(rev=rev).to_disk_doc()
