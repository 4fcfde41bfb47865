import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from auditscan.api.main import create_app
from auditscan.boundary.db import get_async_db


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def client(mock_db):
    app = create_app()

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client, mock_db):
    response = client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    mock_db.execute.assert_awaited_once()


def test_health_check_db_unavailable(client, mock_db):
    mock_db.execute.side_effect = ConnectionRefusedError("connection refused")

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json() == {"detail": "Database connection failed"}
