from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, HTTPException, Query

from hisab.api.schemas.dates import DateResponse
from hisab.domain.errors import InvalidDateFormat
from hisab.domain.nepali_date import (
    Calendar,
    format_primary,
    format_secondary,
    parse_ad_date,
    parse_bs_date,
    to_primary_calendar,
    to_secondary_calendar,
)

router = APIRouter(prefix="/dates", tags=["dates"])


def _to_response(ad: dt.date) -> DateResponse:
    bs = to_secondary_calendar(ad)
    return DateResponse(
        ad=ad.isoformat(),
        bs=bs.isoformat(),
        ad_display=format_primary(ad),
        bs_display=format_secondary(bs),
    )


@router.get("/today", response_model=DateResponse)
def today() -> DateResponse:
    return _to_response(dt.datetime.now(dt.timezone.utc).date())


@router.get("/convert", response_model=DateResponse)
def convert(
    date: str = Query(..., description="YYYY-MM-DD in the given calendar"),
    calendar: Calendar = Query(default=Calendar.BS),
) -> DateResponse:
    try:
        if calendar == Calendar.BS:
            ad = to_primary_calendar(parse_bs_date(date))
        else:
            ad = parse_ad_date(date)
        return _to_response(ad)
    except InvalidDateFormat as e:
        raise HTTPException(status_code=422, detail=str(e))
