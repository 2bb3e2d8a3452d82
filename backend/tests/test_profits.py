from datetime import date
import pytest
from factories import RecordFactory


def test_create_profit_record(client, auth_headers):
    payload = {"source": "Client A", "amount": 1500, "date": "2024-03-10", "margin": 20}
    response = client.post("/api/profits", json=payload, headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["category"] == "project"
    assert body["amount"] == 1500
    assert body["date"] == "2024-03-10"


def test_create_profit_record_rejects_unknown_category(client, auth_headers):
    payload = {"source": "Client A", "amount": 10, "date": "2024-03-10", "category": "misc"}
    response = client.post("/api/profits", json=payload, headers=auth_headers)
    assert response.status_code == 422


def test_create_profit_record_requires_date(client, auth_headers):
    response = client.post("/api/profits", json={"source": "Client A", "amount": 10}, headers=auth_headers)
    assert response.status_code == 422


def test_filter_profits_by_month_and_category(client, db, auth_headers):
    RecordFactory.create_profit_record(db, source="Feb", record_date=date(2024, 2, 29))
    RecordFactory.create_profit_record(db, source="Mar start", record_date=date(2024, 3, 1), category="stock")
    RecordFactory.create_profit_record(db, source="Mar end", record_date=date(2024, 3, 31))
    RecordFactory.create_profit_record(db, source="Apr", record_date=date(2024, 4, 1))

    response = client.get("/api/profits", params={"month": "2024-03"}, headers=auth_headers)
    assert [r["source"] for r in response.json()] == ["Mar start", "Mar end"]

    response = client.get("/api/profits", params={"category": "stock"}, headers=auth_headers)
    assert [r["source"] for r in response.json()] == ["Mar start"]

    response = client.get("/api/profits", params={"month": "2024-12"}, headers=auth_headers)
    assert response.json() == []


def test_malformed_month_is_rejected(client, auth_headers):
    assert client.get("/api/profits", params={"month": "2024-13"}, headers=auth_headers).status_code == 422
    assert client.get("/api/profits", params={"month": "March"}, headers=auth_headers).status_code == 422


def test_update_profit_record(client, db, auth_headers):
    record = RecordFactory.create_profit_record(db)
    response = client.put(f"/api/profits/{record.id}", json={"category": "stock", "amount": 99.5}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "stock"
    assert body["amount"] == 99.5
    assert body["source"] == "Client A"


def test_delete_profit_record(client, db, auth_headers):
    record = RecordFactory.create_profit_record(db)
    response = client.delete(f"/api/profits/{record.id}", headers=auth_headers)
    assert response.json() == {"message": "Profit record deleted successfully"}
    response = client.get(f"/api/profits/{record.id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Profit record not found"


@pytest.mark.parametrize("field", ["source", "category", "amount", "date", "margin"])
def test_update_rejects_null_for_required_fields(client, db, auth_headers, field):
    record = RecordFactory.create_profit_record(db, amount=1500)
    response = client.put(f"/api/profits/{record.id}", json={field: None}, headers=auth_headers)
    assert response.status_code == 422

    response = client.get("/api/profits", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()[0]["amount"] == 1500
