from __future__ import annotations

from pydantic import BaseModel


class SummaryResponse(BaseModel):
    income: str
    expense: str
    net: str
    count: int
    income_display: str
    expense_display: str
    net_display: str
