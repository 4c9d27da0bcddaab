from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from typing import Callable, Sequence

from hisab.domain.money import format_plain
from hisab.domain.nepali_date import to_secondary_calendar
from hisab.domain.transaction import Transaction

LINE_SEPARATOR = "\n"
_SPECIAL = (",", '"', "\n", "\r")


@dataclass(frozen=True)
class CsvColumn:
    header: str
    render: Callable[[Transaction], str]
    always_quote: bool = False


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


DATE_AD = CsvColumn("Date", lambda t: t.date.isoformat())
DATE_BS_LABELLED = CsvColumn("Date (BS)", lambda t: to_secondary_calendar(t.date).isoformat())
DATE_AD_LABELLED = CsvColumn("Date (AD)", lambda t: t.date.isoformat())
TYPE = CsvColumn("Type", lambda t: t.type.value)
SOURCE = CsvColumn("Source/Item", lambda t: t.source, always_quote=True)
AMOUNT = CsvColumn("Amount", lambda t: format_plain(t.amount))
AMOUNT_NPR = CsvColumn("Amount (NPR)", lambda t: format_plain(t.amount))

# export complet / export filtré
ALL_COLUMNS: tuple[CsvColumn, ...] = (DATE_AD, TYPE, SOURCE, AMOUNT)
FILTERED_COLUMNS: tuple[CsvColumn, ...] = (DATE_BS_LABELLED, DATE_AD_LABELLED, TYPE, SOURCE, AMOUNT_NPR)


def _field(value: str, *, force: bool = False) -> str:
    # RFC 4180 : guillemets doubles, et "" pour un guillemet interne
    if force or any(ch in value for ch in _SPECIAL):
        return '"' + value.replace('"', '""') + '"'
    return value


def to_csv(txs: Sequence[Transaction], columns: Sequence[CsvColumn] = ALL_COLUMNS) -> str:
    if not columns:
        raise ValueError("at least one column is required")

    lines = [",".join(_field(c.header) for c in columns)]
    for t in txs:
        lines.append(",".join(_field(c.render(t), force=c.always_quote) for c in columns))
    return LINE_SEPARATOR.join(lines)


def export_filename(prefix: str, today: dt.date) -> str:
    return f"{prefix}-{today.isoformat()}.csv"


def export_transactions(
    txs: Sequence[Transaction],
    *,
    filtered: bool = False,
    today: dt.date | None = None,
) -> CsvExport:
    if today is None:
        today = dt.datetime.now(dt.timezone.utc).date()

    if filtered:
        return CsvExport(
            filename=export_filename("filtered-transactions", today),
            content=to_csv(txs, FILTERED_COLUMNS),
        )
    return CsvExport(filename=export_filename("transactions", today), content=to_csv(txs, ALL_COLUMNS))
