import csv
import datetime as dt
import io

from hisab.domain.transaction import Transaction, TransactionDraft
from hisab.services.csv_export_service import (
    ALL_COLUMNS,
    FILTERED_COLUMNS,
    export_filename,
    export_transactions,
    to_csv,
)


def _tx(source: str = "Salary", type: str = "income", amount: str = "50000", date=dt.date(2024, 1, 15)) -> Transaction:
    return Transaction.create(draft=TransactionDraft.create(date=date, type=type, source=source, amount=amount))


def test_empty_export_is_header_only():
    assert to_csv([], ALL_COLUMNS) == "Date,Type,Source/Item,Amount"


def test_single_row_in_column_order():
    out = to_csv([_tx()], ALL_COLUMNS)
    assert out.split("\n") == ["Date,Type,Source/Item,Amount", '2024-01-15,income,"Salary",50000.00']


def test_filtered_columns_include_both_calendars():
    out = to_csv([_tx(type="expense", source="Rent", amount="15000", date=dt.date(2024, 1, 16))], FILTERED_COLUMNS)
    header, row = out.split("\n")
    assert header == "Date (BS),Date (AD),Type,Source/Item,Amount (NPR)"
    assert row == '2080-01-16,2024-01-16,expense,"Rent",15000.00'


def test_rows_keep_input_order():
    out = to_csv([_tx(source="b"), _tx(source="a")])
    assert [line.split(",")[2] for line in out.split("\n")[1:]] == ['"b"', '"a"']


def test_source_with_quotes_and_commas_is_escaped():
    tricky = 'Shop "Big", Ltd\nBranch'
    out = to_csv([_tx(source=tricky)])

    rows = list(csv.reader(io.StringIO(out)))
    assert rows[1] == ["2024-01-15", "income", tricky, "50000.00"]
    assert '"Shop ""Big"", Ltd' in out


def test_export_filenames():
    today = dt.date(2026, 10, 19)
    assert export_filename("transactions", today) == "transactions-2026-10-19.csv"

    all_export = export_transactions([_tx()], today=today)
    assert all_export.filename == "transactions-2026-10-19.csv"
    assert all_export.content.startswith("Date,Type")

    filtered = export_transactions([], filtered=True, today=today)
    assert filtered.filename == "filtered-transactions-2026-10-19.csv"
    assert filtered.content == "Date (BS),Date (AD),Type,Source/Item,Amount (NPR)"
