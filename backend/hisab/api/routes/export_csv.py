from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Response

from hisab.api.deps import get_tx_store
from hisab.api.routes.transactions import build_criteria
from hisab.domain.nepali_date import Calendar
from hisab.services.csv_export_service import CsvExport, export_transactions
from hisab.services.transaction_filter_service import TypeSelector, apply_filters

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/export", tags=["export"])


def _csv_response(export: CsvExport) -> Response:
    return Response(
        content=export.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("/transactions.csv")
def export_all_csv() -> Response:
    txs = get_tx_store().list()
    export = export_transactions(txs)
    logger.info("CSV export: %d transactions -> %s", len(txs), export.filename)
    return _csv_response(export)


@router.get("/filtered-transactions.csv")
def export_filtered_csv(
    date_from: str = Query(default=""),
    date_to: str = Query(default=""),
    type: TypeSelector = Query(default=TypeSelector.ALL),
    amount_from: str = Query(default=""),
    amount_to: str = Query(default=""),
    calendar: Calendar = Query(default=Calendar.BS),
) -> Response:
    criteria = build_criteria(date_from, date_to, type, amount_from, amount_to, calendar)
    txs = apply_filters(get_tx_store().list(), criteria)
    export = export_transactions(txs, filtered=True)
    logger.info("CSV export (filtered): %d transactions -> %s", len(txs), export.filename)
    return _csv_response(export)
