# hisab/services/transaction_filter_service.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from hisab.domain.errors import InvalidDateFormat
from hisab.domain.money import try_parse_decimal
from hisab.domain.nepali_date import (
    Calendar,
    ad_to_bs,
    bs_to_ad,
    parse_ad_date,
    parse_bs_date,
    to_secondary_calendar,
)
from hisab.domain.transaction import Transaction


class TypeSelector(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class FilterCriteria:
    date_from: str = ""
    date_to: str = ""  # inclusif
    type: TypeSelector = TypeSelector.ALL
    amount_from: str = ""
    amount_to: str = ""
    calendar: Calendar = Calendar.BS  # calendrier des bornes de date

    def with_calendar(self, calendar: Calendar) -> "FilterCriteria":
        """
        Change le calendrier des bornes en convertissant les dates déjà saisies.
        Une borne inconvertible (saisie incomplète) est conservée telle quelle.
        """
        calendar = Calendar(calendar)
        if calendar == self.calendar:
            return self

        convert = ad_to_bs if calendar == Calendar.BS else bs_to_ad

        def conv(value: str) -> str:
            if not value.strip():
                return ""
            try:
                return convert(value)
            except InvalidDateFormat:
                return value

        return replace(
            self,
            date_from=conv(self.date_from),
            date_to=conv(self.date_to),
            calendar=calendar,
        )


def _date_key(t: Transaction, calendar: Calendar) -> str:
    # isoformat() des deux calendriers est à largeur fixe (YYYY-MM-DD)
    if calendar == Calendar.BS:
        return to_secondary_calendar(t.date).isoformat()
    return t.date.isoformat()


def _date_bound(value: str, calendar: Calendar) -> str:
    """Borne normalisée (2080-3-1 -> 2080-03-01); texte brut si elle ne se parse pas."""
    value = value.strip()
    if not value:
        return ""
    try:
        if calendar == Calendar.BS:
            return parse_bs_date(value).isoformat()
        return parse_ad_date(value).isoformat()
    except InvalidDateFormat:
        return value


def matches(t: Transaction, c: FilterCriteria) -> bool:
    date_from = _date_bound(c.date_from, c.calendar)
    date_to = _date_bound(c.date_to, c.calendar)
    if date_from or date_to:
        key = _date_key(t, c.calendar)
        if date_from and key < date_from:
            return False
        if date_to and key > date_to:
            return False

    if c.type != TypeSelector.ALL and t.type.value != c.type.value:
        return False

    low = try_parse_decimal(c.amount_from)
    if low is not None and t.amount < low:
        return False
    high = try_parse_decimal(c.amount_to)
    if high is not None and t.amount > high:
        return False

    return True


def apply_filters(txs: Sequence[Transaction], c: FilterCriteria) -> list[Transaction]:
    # pas de tri : l'ordre d'entrée est conservé
    return [t for t in txs if matches(t, c)]


def active_criteria_count(c: FilterCriteria) -> int:
    count = 0
    if c.date_from.strip():
        count += 1
    if c.date_to.strip():
        count += 1
    if c.type != TypeSelector.ALL:
        count += 1
    if c.amount_from.strip():
        count += 1
    if c.amount_to.strip():
        count += 1
    return count
