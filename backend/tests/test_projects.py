import pytest
from factories import RecordFactory


def test_create_project(client, auth_headers):
    payload = {
        "name": "Harbour Fitout",
        "status": "planning",
        "start_date": "2024-05-01",
        "budget": 12000,
        "profit": 0,
        "description": "Phase one",
    }
    response = client.post("/api/projects", json=payload, headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["name"] == "Harbour Fitout"
    assert body["start_date"] == "2024-05-01"
    assert body["budget"] == 12000
    assert body["created_at"] and body["updated_at"]


def test_create_project_defaults(client, auth_headers):
    response = client.post("/api/projects", json={"name": "Minimal"}, headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "planning"
    assert body["budget"] == 0
    assert body["start_date"] is None


def test_create_project_requires_name(client, auth_headers):
    response = client.post("/api/projects", json={"status": "planning"}, headers=auth_headers)
    assert response.status_code == 422


def test_list_and_filter_projects(client, db, auth_headers):
    RecordFactory.create_project(db, name="A", status="completed")
    RecordFactory.create_project(db, name="B", status="in-progress")
    RecordFactory.create_project(db, name="C", status="completed")

    response = client.get("/api/projects", headers=auth_headers)
    assert [p["name"] for p in response.json()] == ["A", "B", "C"]

    response = client.get("/api/projects", params={"status": "completed"}, headers=auth_headers)
    assert [p["name"] for p in response.json()] == ["A", "C"]


def test_get_project(client, db, auth_headers):
    project = RecordFactory.create_project(db)
    response = client.get(f"/api/projects/{project.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Warehouse Revamp"


def test_get_missing_project(client, auth_headers):
    response = client.get("/api/projects/999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_update_only_touches_supplied_fields(client, db, auth_headers):
    project = RecordFactory.create_project(db, description="Keep me")
    created = client.get(f"/api/projects/{project.id}", headers=auth_headers).json()

    response = client.put(
        f"/api/projects/{project.id}",
        json={"status": "completed", "profit": 750.5, "id": 12345, "created_at": "2000-01-01T00:00:00"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == project.id
    assert body["status"] == "completed"
    assert body["profit"] == 750.5
    assert body["name"] == "Warehouse Revamp"
    assert body["description"] == "Keep me"
    assert body["created_at"] == created["created_at"]
    assert body["updated_at"] >= created["updated_at"]


def test_update_missing_project(client, auth_headers):
    response = client.put("/api/projects/999", json={"status": "completed"}, headers=auth_headers)
    assert response.status_code == 404


def test_delete_project(client, db, auth_headers):
    project = RecordFactory.create_project(db)
    response = client.delete(f"/api/projects/{project.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Project deleted successfully"}

    response = client.delete(f"/api/projects/{project.id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


@pytest.mark.parametrize("field", ["name", "status", "budget", "profit"])
def test_update_rejects_null_for_required_fields(client, db, auth_headers, field):
    project = RecordFactory.create_project(db)
    response = client.put(f"/api/projects/{project.id}", json={field: None}, headers=auth_headers)
    assert response.status_code == 422

    response = client.get("/api/projects", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()[0]["budget"] == 5000


def test_update_allows_clearing_optional_fields(client, db, auth_headers):
    project = RecordFactory.create_project(db, description="Temporary")
    response = client.put(f"/api/projects/{project.id}", json={"description": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["description"] is None
