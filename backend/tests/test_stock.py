import pytest
from app.crud import crud_inventory
from app.models.base import StockItem
from factories import RecordFactory


@pytest.mark.parametrize("quantity,min_threshold,expected", [
    (0, 5, "out-of-stock"),
    (0, 0, "out-of-stock"),
    (3, 5, "low-stock"),
    (5, 5, "low-stock"),
    (6, 5, "in-stock"),
    (4, None, "in-stock"),
])
def test_stock_status(quantity, min_threshold, expected):
    item = StockItem(name="x", quantity=quantity, min_threshold=min_threshold)
    assert crud_inventory.get_stock_status(item) == expected


def test_create_stock_item(client, auth_headers):
    payload = {
        "name": "Steel Rods",
        "category": "materials",
        "quantity": 40,
        "unit_price": 12.5,
        "min_threshold": 10,
        "supplier": "Acme",
    }
    response = client.post("/api/stock", json=payload, headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["total_value"] == 500
    assert body["stock_status"] == "in-stock"
    assert body["supplier"] == "Acme"


def test_create_stock_item_rejects_negative_quantity(client, auth_headers):
    response = client.post("/api/stock", json={"name": "Bad", "quantity": -1}, headers=auth_headers)
    assert response.status_code == 422


def test_list_stock_and_low_stock_filter(client, db, auth_headers):
    RecordFactory.create_stock_item(db, name="Cement", quantity=10, min_threshold=5)
    RecordFactory.create_stock_item(db, name="Sand", quantity=2, min_threshold=5)
    RecordFactory.create_stock_item(db, name="Gravel", quantity=5, min_threshold=5)

    response = client.get("/api/stock", headers=auth_headers)
    assert [i["name"] for i in response.json()] == ["Cement", "Sand", "Gravel"]

    response = client.get("/api/stock", params={"low_stock": True}, headers=auth_headers)
    assert [i["name"] for i in response.json()] == ["Sand", "Gravel"]


def test_update_stock_item(client, db, auth_headers):
    item = RecordFactory.create_stock_item(db, quantity=10, unit_price=2.5, min_threshold=5)
    response = client.put(f"/api/stock/{item.id}", json={"quantity": 3}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["quantity"] == 3
    assert body["unit_price"] == 2.5
    assert body["total_value"] == 7.5
    assert body["stock_status"] == "low-stock"


def test_get_and_delete_stock_item(client, db, auth_headers):
    item = RecordFactory.create_stock_item(db)
    assert client.get(f"/api/stock/{item.id}", headers=auth_headers).json()["name"] == "Cement"

    response = client.delete(f"/api/stock/{item.id}", headers=auth_headers)
    assert response.json() == {"message": "Stock item deleted successfully"}

    response = client.get(f"/api/stock/{item.id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Stock item not found"


def test_update_missing_stock_item(client, auth_headers):
    response = client.put("/api/stock/999", json={"quantity": 1}, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.parametrize("field", ["name", "category", "quantity", "unit_price", "min_threshold"])
def test_update_rejects_null_for_required_fields(client, db, auth_headers, field):
    item = RecordFactory.create_stock_item(db, quantity=10)
    response = client.put(f"/api/stock/{item.id}", json={field: None}, headers=auth_headers)
    assert response.status_code == 422

    response = client.get("/api/stock", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()[0]["quantity"] == 10
