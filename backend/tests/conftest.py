import datetime as dt
import itertools
from uuid import UUID

import pytest

from hisab.repositories.in_memory_key_value_store import InMemoryKeyValueStore
from hisab.repositories.transaction_store import TransactionStore


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def fixed_clock():
    ticks = itertools.count()

    def clock() -> dt.datetime:
        return dt.datetime(2024, 1, 1, 12, 0, tzinfo=dt.timezone.utc) + dt.timedelta(seconds=next(ticks))

    return clock


@pytest.fixture
def store(kv, fixed_clock) -> TransactionStore:
    ids = (UUID(int=i) for i in itertools.count(1))
    return TransactionStore(kv=kv, clock=fixed_clock, id_factory=lambda: next(ids))
