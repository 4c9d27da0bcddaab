from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from hisab.api.deps import get_tx_store
from hisab.api.mappers.transaction_mapper import tx_to_response
from hisab.api.schemas.transactions import (
    TransactionFormRequest,
    TransactionListResponse,
    TransactionResponse,
    ValidationErrorResponse,
)
from hisab.domain.errors import TransactionNotFound
from hisab.domain.nepali_date import Calendar
from hisab.services.form_validator import TransactionForm, to_draft, validate
from hisab.services.transaction_filter_service import (
    FilterCriteria,
    TypeSelector,
    active_criteria_count,
    apply_filters,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def build_criteria(
    date_from: str = "",
    date_to: str = "",
    type: TypeSelector = TypeSelector.ALL,
    amount_from: str = "",
    amount_to: str = "",
    calendar: Calendar = Calendar.BS,
) -> FilterCriteria:
    return FilterCriteria(
        date_from=date_from,
        date_to=date_to,
        type=type,
        amount_from=amount_from,
        amount_to=amount_to,
        calendar=calendar,
    )


def _to_form(payload: TransactionFormRequest) -> TransactionForm:
    return TransactionForm(
        date=payload.date,
        type=payload.type.value,
        source=payload.source,
        amount=payload.amount,
        date_format=payload.date_format,
    )


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=201,
    responses={422: {"model": ValidationErrorResponse}},
)
def create_transaction(payload: TransactionFormRequest):
    # 1) validation par champ (toutes les erreurs d'un coup)
    form = _to_form(payload)
    errors = validate(form)
    if errors:
        return JSONResponse(status_code=422, content={"errors": errors})

    # 2) stocker
    tx = get_tx_store().add(to_draft(form))
    return tx_to_response(tx)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    date_from: str = Query(default=""),
    date_to: str = Query(default=""),
    type: TypeSelector = Query(default=TypeSelector.ALL),
    amount_from: str = Query(default=""),
    amount_to: str = Query(default=""),
    calendar: Calendar = Query(default=Calendar.BS),
) -> TransactionListResponse:
    criteria = build_criteria(date_from, date_to, type, amount_from, amount_to, calendar)
    txs = get_tx_store().list()

    out = apply_filters(txs, criteria)
    return TransactionListResponse(
        items=[tx_to_response(t) for t in out],
        total=len(txs),
        active_filters=active_criteria_count(criteria),
    )


@router.get("/recent", response_model=list[TransactionResponse])
def recent_transactions(limit: int = Query(default=10, ge=0, le=100)) -> list[TransactionResponse]:
    return [tx_to_response(t) for t in get_tx_store().recent(limit)]


@router.get("/{tx_id}", response_model=TransactionResponse)
def get_transaction(tx_id: UUID) -> TransactionResponse:
    tx = get_tx_store().get(tx_id)
    if tx is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return tx_to_response(tx)


@router.put(
    "/{tx_id}",
    response_model=TransactionResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
def update_transaction(tx_id: UUID, payload: TransactionFormRequest):
    form = _to_form(payload)
    errors = validate(form)
    if errors:
        return JSONResponse(status_code=422, content={"errors": errors})

    try:
        updated = get_tx_store().update(tx_id, to_draft(form))
    except TransactionNotFound:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return tx_to_response(updated)


@router.delete("/{tx_id}", status_code=204)
def delete_transaction(tx_id: UUID) -> Response:
    try:
        get_tx_store().delete(tx_id)
    except TransactionNotFound:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return Response(status_code=204)
