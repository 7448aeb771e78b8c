import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from preferensi_api.core.config import Settings
from preferensi_api.database import build_engine, create_db_and_tables
from preferensi_api.main import create_app


@pytest.fixture
def settings():
    """In-memory store, cheap bcrypt."""
    return Settings(
        TOKEN_KEY="test-secret",
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(settings):
    """Standalone session on a fresh in-memory database."""
    engine = build_engine(settings)
    create_db_and_tables(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


@pytest.fixture
def register_user(client):
    """Register and log in a user; returns (payload, loginResult)."""

    def _register(email="budi@example.com", name="Budi", password="rahasia123"):
        payload = {"email": email, "name": name, "password": password}
        r = client.post("/register", json=payload)
        assert r.status_code == 201, r.text
        login = client.post("/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return payload, login.json()["loginResult"]

    return _register
