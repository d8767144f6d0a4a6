"""
Shared test fixtures.

MongoEngine is pointed at an in-memory mongomock client per test, and the
auth flow is rebuilt with a cheap bcrypt cost so suites stay fast.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect

from app.connections.mongo import DOCUMENTS, ensure_indexes
from app.services.auth import AuthConfig, AuthenticationFlow, get_auth_flow
from app.services.auth.schemas import RegisterInput
from app.utils.config import settings


TEST_JWT_SECRET = "test-secret-key-for-testing-only"

JANE = {
    "firstName": "Jane",
    "lastName": "Doe",
    "age": 25,
    "email": "jane@example.com",
    "password": "Strong@123",
    "securityQuestion": "Pet name?",
    "securityAnswer": "Rex",
}


@pytest.fixture(autouse=True)
def mongo():
    """Fresh in-memory database for every test."""
    disconnect(alias="default")
    connect("streaming_catalog_test", host="mongodb://localhost", alias="default", mongo_client_class=mongomock.MongoClient)
    ensure_indexes()
    yield
    for document in DOCUMENTS:
        document.drop_collection()
    disconnect(alias="default")


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret_key=TEST_JWT_SECRET, bcrypt_rounds=4)


@pytest.fixture
def flow(auth_config) -> AuthenticationFlow:
    return AuthenticationFlow(auth_config)


@pytest.fixture
def jane(flow) -> dict:
    """Registered user with the JANE credentials."""
    return flow.register(RegisterInput.model_validate(JANE))


@pytest.fixture
def client(flow, monkeypatch):
    from main import app

    monkeypatch.setattr(settings, "rate_limit_enabled", False)
    app.dependency_overrides[get_auth_flow] = lambda: flow
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(client):
    """Client that returns 500 responses instead of re-raising server errors."""
    from main import app

    return TestClient(app, raise_server_exceptions=False)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
