import datetime as dt
import itertools

import pytest

from hisab.domain.nepali_date import Calendar
from hisab.domain.transaction import Transaction, TransactionDraft
from hisab.services.transaction_filter_service import (
    FilterCriteria,
    TypeSelector,
    active_criteria_count,
    apply_filters,
    matches,
)


def _tx(date: dt.date, type: str, amount: str, source: str = "x") -> Transaction:
    return Transaction.create(draft=TransactionDraft.create(date=date, type=type, source=source, amount=amount))


@pytest.fixture
def txs():
    return [
        _tx(dt.date(2024, 3, 1), "expense", "20", "c"),
        _tx(dt.date(2024, 1, 16), "expense", "15000", "b"),
        _tx(dt.date(2024, 1, 15), "income", "50000", "a"),
    ]


def test_default_criteria_keep_everything_in_order(txs):
    assert apply_filters(txs, FilterCriteria()) == txs


def test_filter_by_type(txs):
    out = apply_filters(txs, FilterCriteria(type=TypeSelector.INCOME))
    assert [t.source for t in out] == ["a"]


def test_filter_by_ad_date_range_inclusive(txs):
    c = FilterCriteria(date_from="2024-01-15", date_to="2024-01-16", calendar=Calendar.AD)
    assert [t.source for t in apply_filters(txs, c)] == ["b", "a"]


def test_filter_by_bs_date_range(txs):
    # 2024-03-01 AD -> 2080-03-01 BS
    c = FilterCriteria(date_from="2080-02-01", calendar=Calendar.BS)
    assert [t.source for t in apply_filters(txs, c)] == ["c"]


def test_bs_bounds_do_not_match_ad_dates(txs):
    c = FilterCriteria(date_to="2024-12-31", calendar=Calendar.BS)
    assert apply_filters(txs, c) == []


def test_filter_by_amount_range_inclusive(txs):
    c = FilterCriteria(amount_from="20", amount_to="15000")
    assert [t.source for t in apply_filters(txs, c)] == ["c", "b"]


def test_unparsable_amount_bound_is_ignored(txs):
    c = FilterCriteria(amount_from="abc", amount_to="  ")
    assert apply_filters(txs, c) == txs


def test_all_criteria_are_combined(txs):
    c = FilterCriteria(
        date_from="2024-01-01",
        date_to="2024-12-31",
        type=TypeSelector.EXPENSE,
        amount_from="100",
        calendar=Calendar.AD,
    )
    assert [t.source for t in apply_filters(txs, c)] == ["b"]


def test_single_transaction_matches_iff_every_predicate_holds():
    t = _tx(dt.date(2024, 1, 15), "income", "500")
    bounds = ["", "2024-01-14", "2024-01-15", "2024-01-16"]
    amounts = ["", "499", "500", "501", "x"]
    types = list(TypeSelector)

    for date_from, date_to, type_, low, high in itertools.product(bounds, bounds, types, amounts, amounts):
        c = FilterCriteria(
            date_from=date_from, date_to=date_to, type=type_, amount_from=low, amount_to=high, calendar=Calendar.AD
        )
        expected = (
            (not date_from or "2024-01-15" >= date_from)
            and (not date_to or "2024-01-15" <= date_to)
            and type_ in (TypeSelector.ALL, TypeSelector.INCOME)
            and (low in ("", "x") or 500 >= int(low))
            and (high in ("", "x") or 500 <= int(high))
        )
        assert matches(t, c) is expected
        assert (t in apply_filters([t], c)) is expected


def test_active_criteria_count():
    assert active_criteria_count(FilterCriteria()) == 0
    assert active_criteria_count(FilterCriteria(calendar=Calendar.AD)) == 0
    assert active_criteria_count(FilterCriteria(type=TypeSelector.EXPENSE)) == 1
    full = FilterCriteria(
        date_from="2080-01-01",
        date_to="2080-12-30",
        type=TypeSelector.INCOME,
        amount_from="1",
        amount_to="abc",
    )
    assert active_criteria_count(full) == 5


def test_with_calendar_converts_bounds():
    c = FilterCriteria(date_from="2080-01-15", date_to="", calendar=Calendar.BS)
    ad = c.with_calendar(Calendar.AD)
    assert ad.calendar == Calendar.AD
    assert ad.date_from == "2024-01-15"
    assert ad.date_to == ""
    assert ad.with_calendar(Calendar.BS) == c


def test_with_calendar_keeps_unconvertible_bounds():
    c = FilterCriteria(date_from="2080-01", calendar=Calendar.BS)
    assert c.with_calendar(Calendar.AD).date_from == "2080-01"


def test_unpadded_date_bounds_are_normalized():
    tx = _tx(dt.date(2024, 3, 5), "expense", "10")

    assert apply_filters([tx], FilterCriteria(date_from="2080-3-1", calendar=Calendar.BS)) == [tx]
    assert apply_filters([tx], FilterCriteria(date_to="2080-3-5", calendar=Calendar.BS)) == [tx]
    assert apply_filters([tx], FilterCriteria(date_from="2024-3-6", calendar=Calendar.AD)) == []
