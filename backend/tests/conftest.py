"""
Shared fixtures: an in-memory database rebuilt for every test and an
authenticated API client.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_EMAIL"] = "admin@bongoportus.com"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["STATIC_DIR"] = os.path.join(os.path.dirname(__file__), "no-static")

import pytest
from fastapi.testclient import TestClient

from app.crud import crud_admin
from app.db.session import Base, SessionLocal, engine
from app.main import app

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    crud_admin.ensure_admin(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    return TestClient(app)


@pytest.fixture()
def auth_headers(client):
    response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
