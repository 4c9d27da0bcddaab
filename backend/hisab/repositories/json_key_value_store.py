from __future__ import annotations

import json
from pathlib import Path

from hisab.repositories.key_value_store import KeyValueStore


class JsonKeyValueStore(KeyValueStore):
    """Un seul fichier JSON {clé: valeur}. Écriture atomique via fichier .tmp."""

    def __init__(self, *, path: Path) -> None:
        self._path = path

        # Fichier absent => OK (vide)
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._write_all({})

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{self._path.name}: value for key '{key}' must be a string")
        return value

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a string")
        payload = self._read_all()
        payload[key] = value
        self._write_all(payload)

    # ---------- internals ----------
    def _read_all(self) -> dict:
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"{self._path.name}: invalid JSON ({e})") from e

        if not isinstance(payload, dict):
            raise ValueError(f"{self._path.name}: root must be an object")
        return payload

    def _write_all(self, payload: dict) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        tmp_path.replace(self._path)
