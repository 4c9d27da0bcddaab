import pytest
from fastapi.testclient import TestClient

from hisab.api import deps
from hisab.api.main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("HISAB_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HISAB_DATABASE_URL", raising=False)
    deps.get_kv_store.cache_clear()
    deps.get_tx_store.cache_clear()
    with TestClient(app) as c:
        yield c
    deps.get_kv_store.cache_clear()
    deps.get_tx_store.cache_clear()


def _seed(client):
    client.post(
        "/transactions",
        json={"date": "2024-01-15", "type": "income", "source": "Salary", "amount": "50000", "date_format": "AD"},
    )
    client.post(
        "/transactions",
        json={"date": "2024-01-16", "type": "expense", "source": 'Rent, "flat"', "amount": "15000", "date_format": "AD"},
    )


def test_export_all_csv(client):
    _seed(client)
    r = client.get("/export/transactions.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    assert 'filename="transactions-' in r.headers["content-disposition"]
    assert r.text.split("\n") == [
        "Date,Type,Source/Item,Amount",
        '2024-01-16,expense,"Rent, ""flat""",15000.00',
        '2024-01-15,income,"Salary",50000.00',
    ]


def test_export_filtered_csv(client):
    _seed(client)
    r = client.get("/export/filtered-transactions.csv", params={"type": "income"})
    assert r.status_code == 200
    assert 'filename="filtered-transactions-' in r.headers["content-disposition"]
    assert r.text.split("\n") == [
        "Date (BS),Date (AD),Type,Source/Item,Amount (NPR)",
        '2080-01-15,2024-01-15,income,"Salary",50000.00',
    ]


def test_export_empty_is_header_only(client):
    assert client.get("/export/transactions.csv").text == "Date,Type,Source/Item,Amount"


def test_dates_today(client):
    body = client.get("/dates/today").json()
    year, month, day = body["ad"].split("-")
    assert body["bs"] == f"{int(year) + 56:04d}-{month}-{day}"


def test_dates_convert(client):
    r = client.get("/dates/convert", params={"date": "2081-01-15", "calendar": "BS"})
    assert r.status_code == 200
    assert r.json() == {
        "ad": "2025-01-15",
        "bs": "2081-01-15",
        "ad_display": "Jan 15, 2025",
        "bs_display": "बैशाख 15, 2081",
    }

    r = client.get("/dates/convert", params={"date": "2024-02-29", "calendar": "AD"})
    assert r.json()["bs"] == "2080-02-29"


def test_dates_convert_rejects_invalid(client):
    assert client.get("/dates/convert", params={"date": "2081-02-30", "calendar": "BS"}).status_code == 422
    assert client.get("/dates/convert", params={"date": "garbage"}).status_code == 422
