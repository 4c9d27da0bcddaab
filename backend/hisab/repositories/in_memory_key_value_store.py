from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InMemoryKeyValueStore:
    """
    Store clé/valeur en mémoire.
    - Déterministe
    - Facile à tester
    - Perdu au redémarrage
    """
    _items: dict[str, str] = field(default_factory=dict)
    writes: int = 0

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a string")
        self._items[key] = value
        self.writes += 1
