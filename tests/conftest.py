"""Shared fixtures: a throwaway SQLite database behind the real application."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from components.core.cache import query_cache
from components.core.database import Base, DatabaseManager
from components.core.init_db import get_db
from main import app

HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_204_NO_CONTENT = 204


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "budget.db"


@pytest.fixture()
def client(db_path):
    """TestClient whose requests run against a fresh SQLite file."""
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    manager = DatabaseManager(
        engine=create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    )

    async def override_get_db():
        async with manager.get_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    query_cache.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    query_cache.clear()


@pytest.fixture()
def register(client):
    """Register a household and return its auth headers."""

    def _register(login: str = "couple", password: str = "secret123") -> dict:
        response = client.post("/auth/register", json={
            "login": login,
            "password": password,
            "display_name": "Alex",
            "partner_name": "Sam",
        })
        assert response.status_code == HTTP_201_CREATED, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register


@pytest.fixture()
def auth_headers(register):
    return register()


@pytest.fixture()
def make_category(client, auth_headers):
    def _make(name: str = "Groceries", **fields) -> dict:
        response = client.post("/categories/", json={"name": name, **fields}, headers=auth_headers)
        assert response.status_code == HTTP_201_CREATED, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_month(client, auth_headers):
    def _make(year: int, month: int) -> dict:
        response = client.post("/budget/months", json={"year": year, "month": month}, headers=auth_headers)
        assert response.status_code == HTTP_201_CREATED, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_transaction(client, auth_headers):
    def _make(**fields) -> dict:
        payload = {"amount": "-10.00", "merchant": "Corner shop", "transaction_date": "2025-03-10"}
        payload.update(fields)
        response = client.post("/transactions/", json=payload, headers=auth_headers)
        assert response.status_code == HTTP_201_CREATED, response.text
        return response.json()

    return _make
