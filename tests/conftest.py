"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.database import get_db
from app.main import app
from tests.data import CUSTOMER, MONDAY, SERVICE_A


@pytest.fixture
def db():
    """In-memory MongoDB stand-in."""
    return AsyncMongoMockClient()["bookit_test"]


@pytest.fixture
def client(db):
    """FastAPI test client wired to the in-memory database."""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Register an admin and return its bearer auth header."""
    response = client.post(
        "/api/auth/register",
        json={"username": "admin", "email": "admin@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def create_service(client, admin_headers):
    """Create a service through the API, overriding any SERVICE_A field."""
    def _create(**overrides):
        response = client.post("/api/services", json={**SERVICE_A, **overrides}, headers=admin_headers)
        assert response.status_code == 201
        return response.json()
    return _create


@pytest.fixture
def booking_payload():
    def _payload(service_ids, day=MONDAY, at="10:00", total=50.0, quantity=1):
        return {
            "services": [{"serviceId": sid, "quantity": quantity} for sid in service_ids],
            "customer": CUSTOMER,
            "bookingDate": day.isoformat(),
            "bookingTime": at,
            "totalPrice": total,
        }
    return _payload
