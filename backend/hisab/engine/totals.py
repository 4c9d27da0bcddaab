# hisab/engine/totals.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from collections import defaultdict
from typing import Iterable

from hisab.domain.money import quantize_amount
from hisab.domain.transaction import Transaction, TransactionType


@dataclass(frozen=True)
class Totals:
    income: Decimal
    expense: Decimal
    net: Decimal
    count: int


def compute_totals(txs: Iterable[Transaction]) -> Totals:
    acc: dict[TransactionType, Decimal] = defaultdict(Decimal)
    count = 0

    for t in txs:
        acc[t.type] += t.amount
        count += 1

    income = quantize_amount(acc[TransactionType.INCOME])
    expense = quantize_amount(acc[TransactionType.EXPENSE])
    return Totals(income=income, expense=expense, net=income - expense, count=count)
