from __future__ import annotations

from hisab.api.schemas.transactions import TransactionResponse
from hisab.domain.money import format_plain
from hisab.domain.nepali_date import format_currency, format_primary, format_secondary, to_secondary_calendar
from hisab.domain.transaction import Transaction


def tx_to_response(tx: Transaction) -> TransactionResponse:
    bs = to_secondary_calendar(tx.date)
    return TransactionResponse(
        id=str(tx.id),
        date=tx.date,
        date_bs=bs.isoformat(),
        date_display=format_primary(tx.date),
        date_bs_display=format_secondary(bs),
        type=tx.type,
        source=tx.source,
        amount=format_plain(tx.amount),
        amount_display=format_currency(tx.amount),
        created_at=tx.created_at,
    )
