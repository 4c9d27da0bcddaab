from __future__ import annotations

from functools import lru_cache

from hisab.settings import get_settings
from hisab.repositories.json_key_value_store import JsonKeyValueStore
from hisab.repositories.key_value_store import KeyValueStore
from hisab.repositories.sql_key_value_store import SqlKeyValueStore
from hisab.repositories.transaction_store import TransactionStore


@lru_cache
def get_kv_store() -> KeyValueStore:
    # If HISAB_DATABASE_URL is set -> use SQL store (Postgres/SQLite)
    settings = get_settings()
    if settings.database_url:
        return SqlKeyValueStore()
    return JsonKeyValueStore(path=settings.data_dir / "storage.json")


@lru_cache
def get_tx_store() -> TransactionStore:
    settings = get_settings()
    return TransactionStore(kv=get_kv_store(), key=settings.storage_key)
