from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field

from hisab.domain.nepali_date import Calendar
from hisab.domain.transaction import TransactionType


class TransactionFormRequest(BaseModel):
    # valeurs brutes : la validation par champ est faite par form_validator
    date: str = Field(default="", examples=["2080-10-01", "2024-01-15"])
    type: TransactionType = TransactionType.EXPENSE
    source: str = ""
    amount: str = Field(
        default="",
        examples=["50000", "1234.50"],
        description="Positive amount as string, e.g. '15000' or '12.5'",
    )
    date_format: Calendar = Calendar.BS


class TransactionResponse(BaseModel):
    id: str
    date: dt.date
    date_bs: str
    date_display: str
    date_bs_display: str
    type: TransactionType
    source: str
    amount: str
    amount_display: str
    created_at: dt.datetime


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    active_filters: int


class ValidationErrorResponse(BaseModel):
    errors: dict[str, str]
