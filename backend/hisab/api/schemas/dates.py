from __future__ import annotations

from pydantic import BaseModel


class DateResponse(BaseModel):
    ad: str
    bs: str
    ad_display: str
    bs_display: str
