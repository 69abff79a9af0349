import os

# Must be set before anything under app/ is imported: config is read once.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_todo.db")
os.environ.setdefault("SECRET_KEY", "test-only-signing-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.database import SessionLocal, Base, engine


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login(client):
    """Register ``username`` and return the bearer token from logging in."""

    def _login(username: str, password: str = "Pass123!") -> str:
        r = client.post("/auth/register", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        r = client.post("/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return r.json()["token"]

    return _login

