from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from hisab.domain.money import parse_amount
from hisab.domain.nepali_date import ensure_supported_ad_date


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


def _norm_source(source: object) -> str:
    if not isinstance(source, str) or source.strip() == "":
        raise ValueError("source cannot be empty")
    return source.strip()


@dataclass(frozen=True)
class TransactionDraft:
    """Champs saisis d'une transaction, avant attribution de id / created_at."""
    date: dt.date
    type: TransactionType
    source: str
    amount: Decimal

    @staticmethod
    def create(
        *,
        date: dt.date,
        type: TransactionType | str,
        source: str,
        amount: Decimal | str | int | float,
    ) -> "TransactionDraft":
        if not isinstance(date, dt.date) or isinstance(date, dt.datetime):
            raise ValueError("date must be a date")
        # la date doit rester convertible en BS
        ensure_supported_ad_date(date)

        try:
            norm_type = TransactionType(type)
        except ValueError as e:
            raise ValueError(f"type must be one of income/expense (got {type!r})") from e

        return TransactionDraft(
            date=date,
            type=norm_type,
            source=_norm_source(source),
            amount=parse_amount(amount),
        )


@dataclass(frozen=True)
class Transaction:
    id: UUID
    date: dt.date
    type: TransactionType
    source: str
    amount: Decimal
    created_at: dt.datetime

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    def to_draft(self) -> TransactionDraft:
        return TransactionDraft(date=self.date, type=self.type, source=self.source, amount=self.amount)

    @staticmethod
    def create(
        *,
        draft: TransactionDraft,
        id: Optional[UUID] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> "Transaction":
        if not isinstance(draft, TransactionDraft):
            raise ValueError("draft must be a TransactionDraft")

        # re-validation : un draft construit à la main peut contourner create()
        checked = TransactionDraft.create(
            date=draft.date,
            type=draft.type,
            source=draft.source,
            amount=draft.amount,
        )

        if id is not None and not isinstance(id, UUID):
            raise ValueError("id must be a UUID")
        final_id = id or uuid4()

        if created_at is None:
            final_created_at = dt.datetime.now(dt.timezone.utc)
        else:
            if not isinstance(created_at, dt.datetime):
                raise ValueError("created_at must be a datetime")
            if created_at.tzinfo is None:
                raise ValueError("created_at must be timezone-aware (UTC recommended)")
            final_created_at = created_at.astimezone(dt.timezone.utc)

        return Transaction(
            id=final_id,
            date=checked.date,
            type=checked.type,
            source=checked.source,
            amount=checked.amount,
            created_at=final_created_at,
        )
