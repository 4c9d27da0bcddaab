from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """Stockage durable clé -> texte (équivalent de localStorage)."""

    def get(self, key: str) -> str | None:
        """Return None if the key was never written."""
        ...

    def set(self, key: str, value: str) -> None:
        ...
