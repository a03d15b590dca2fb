from __future__ import annotations

from typing import Protocol


class DurableDocumentStore(Protocol):
    """
    The only persistence contract the coordination core depends on:
    one opaque byte blob that is either absent or fully written.
    """

    def load_durable(self) -> bytes | None:
        """Return the stored bytes, or None when nothing has been saved yet."""
        ...

    def save_durable(self, data: bytes) -> None:
        """Replace the stored bytes. Raises OSError on failure."""
        ...
