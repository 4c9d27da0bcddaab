from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Callable
from uuid import UUID, uuid4, uuid5, NAMESPACE_URL

from hisab.domain.errors import TransactionNotFound
from hisab.domain.money import format_plain
from hisab.domain.transaction import Transaction, TransactionDraft, TransactionType
from hisab.engine.totals import Totals, compute_totals
from hisab.repositories.key_value_store import KeyValueStore
from hisab.settings import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def legacy_id_to_uuid(raw: str) -> UUID:
    """Les anciens ids (timestamp ms en texte) deviennent un uuid5 stable."""
    return uuid5(NAMESPACE_URL, f"hisab:transaction:{raw}")


class TransactionStore:
    """
    Collection ordonnée des transactions (la plus récente en tête).

    Toute mutation est suivie d'une écriture complète de la collection dans le
    KeyValueStore, sous une clé fixe. La lecture n'a lieu qu'une fois, à la
    construction : si le contenu stocké est illisible, on démarre vide et
    l'erreur est exposée dans `load_error`.
    """

    def __init__(
        self,
        *,
        kv: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], dt.datetime] = _utcnow,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._kv = kv
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self._items: list[Transaction] = []
        self.load_error: str | None = None
        self.load()

    # ---------- lifecycle ----------
    def load(self) -> int:
        """Hydrate depuis le store. Ne lève jamais : retourne le nombre chargé."""
        self.load_error = None
        try:
            raw = self._kv.get(self._key)
            items = [] if raw is None else self._decode(raw)
        except Exception as e:
            # non fatal : on repart d'une collection vide
            self.load_error = str(e)
            self._items = []
            logger.warning("Error loading transactions from key %r, starting empty", self._key, exc_info=True)
            return 0

        self._items = items
        logger.info("Loaded %d transactions from key %r", len(items), self._key)
        return len(items)

    # ---------- mutations ----------
    def add(self, draft: TransactionDraft) -> Transaction:
        tx = Transaction.create(draft=draft, id=self._new_id(), created_at=self._clock())
        self._commit([tx, *self._items])
        logger.debug("Added transaction %s", tx.id)
        return tx

    def update(self, tx_id: UUID, draft: TransactionDraft) -> Transaction:
        idx = self._index_of(tx_id)
        current = self._items[idx]

        updated = Transaction.create(draft=draft, id=current.id, created_at=current.created_at)
        items = list(self._items)
        items[idx] = updated
        self._commit(items)
        logger.debug("Updated transaction %s", tx_id)
        return updated

    def delete(self, tx_id: UUID) -> None:
        idx = self._index_of(tx_id)
        items = list(self._items)
        del items[idx]
        self._commit(items)
        logger.debug("Deleted transaction %s", tx_id)

    # ---------- reads ----------
    def get(self, tx_id: UUID) -> Transaction | None:
        for t in self._items:
            if t.id == tx_id:
                return t
        return None

    def list(self) -> list[Transaction]:
        return list(self._items)

    def recent(self, limit: int = RECENT_LIMIT) -> list[Transaction]:
        if limit < 0:
            raise ValueError("limit must be >= 0")
        return self._items[:limit]

    def totals(self) -> Totals:
        # petite collection : recalcul à chaque appel, pas de cache
        return compute_totals(self._items)

    def __len__(self) -> int:
        return len(self._items)

    # ---------- internals ----------
    def _new_id(self) -> UUID:
        existing = {t.id for t in self._items}
        new_id = self._id_factory()
        while new_id in existing:
            new_id = self._id_factory()
        return new_id

    def _index_of(self, tx_id: UUID) -> int:
        for i, t in enumerate(self._items):
            if t.id == tx_id:
                return i
        raise TransactionNotFound(tx_id)

    def save(self) -> None:
        """Écrit la collection complète sous la clé du store."""
        self._write(self._items)

    def _commit(self, items: list[Transaction]) -> None:
        # mémoire modifiée seulement si l'écriture a réussi
        self._write(items)
        self._items = items

    def _write(self, items: list[Transaction]) -> None:
        payload = [self._to_record(t) for t in items]
        self._kv.set(self._key, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))

    def _decode(self, raw: str) -> list[Transaction]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON ({e})") from e

        if not isinstance(data, list):
            raise ValueError("stored transactions must be a list")

        out: list[Transaction] = []
        seen: set[UUID] = set()
        for i, rec in enumerate(data):
            try:
                tx = self._from_record(rec)
            except Exception as e:
                raise ValueError(f"record {i}: {e}") from e
            if tx.id in seen:
                raise ValueError(f"record {i}: duplicate id {tx.id}")
            seen.add(tx.id)
            out.append(tx)
        return out

    @staticmethod
    def _to_record(tx: Transaction) -> dict:
        return {
            "id": str(tx.id),
            "date": tx.date.isoformat(),
            "type": tx.type.value,
            "source": tx.source,
            "amount": format_plain(tx.amount),
            "createdAt": tx.created_at.isoformat(),
        }

    @classmethod
    def _from_record(cls, data: object) -> Transaction:
        if not isinstance(data, dict):
            raise ValueError("record must be an object")

        id_str = cls._req_str(data, "id").strip()
        try:
            tx_id = UUID(id_str)
        except ValueError:
            if not id_str:
                raise ValueError("id cannot be empty")
            tx_id = legacy_id_to_uuid(id_str)

        date = dt.date.fromisoformat(cls._req_str(data, "date").strip())

        amount = data.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, (str, int, float)):
            raise ValueError("field 'amount' must be a string or a number")

        created_str = cls._req_str(data, "createdAt").strip()
        if created_str.endswith("Z"):
            created_str = created_str[:-1] + "+00:00"
        created_at = dt.datetime.fromisoformat(created_str)
        if created_at.tzinfo is None:
            raise ValueError("createdAt must be timezone-aware")

        draft = TransactionDraft.create(
            date=date,
            type=TransactionType(cls._req_str(data, "type")),
            source=cls._req_str(data, "source"),
            amount=amount,
        )
        return Transaction.create(draft=draft, id=tx_id, created_at=created_at)

    @staticmethod
    def _req_str(d: dict, key: str) -> str:
        if key not in d:
            raise ValueError(f"missing field '{key}'")
        v = d[key]
        if not isinstance(v, str):
            raise ValueError(f"field '{key}' must be a string")
        return v

