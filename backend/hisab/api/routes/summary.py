from __future__ import annotations

from fastapi import APIRouter

from hisab.api.deps import get_tx_store
from hisab.api.schemas.summary import SummaryResponse
from hisab.domain.money import format_plain
from hisab.domain.nepali_date import format_currency

router = APIRouter(tags=["summary"])


@router.get("/summary", response_model=SummaryResponse)
def get_summary() -> SummaryResponse:
    totals = get_tx_store().totals()
    return SummaryResponse(
        income=format_plain(totals.income),
        expense=format_plain(totals.expense),
        net=format_plain(totals.net),
        count=totals.count,
        income_display=format_currency(totals.income),
        expense_display=format_currency(totals.expense),
        net_display=format_currency(totals.net),
    )
