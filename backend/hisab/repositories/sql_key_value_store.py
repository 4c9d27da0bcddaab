from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hisab.db import init_db, new_session
from hisab.db_base import Base
from hisab.repositories.key_value_store import KeyValueStore


class KeyValueRow(Base):
    __tablename__ = "key_values"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        # ensure tables exist (V1 simple). Later we can move to migrations.
        init_db()

    def get(self, key: str) -> str | None:
        with new_session() as s:
            row = s.get(KeyValueRow, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a string")

        now = dt.datetime.now(dt.timezone.utc)
        with new_session() as s:
            row = s.get(KeyValueRow, key)
            if row is None:
                s.add(KeyValueRow(key=key, value=value, updated_at=now))
            else:
                row.value = value
                row.updated_at = now
            s.commit()
