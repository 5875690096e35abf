import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fittrack.core.database import Base, get_db, init_db
from fittrack.main import app
from fittrack.utils.rate_limiter import rate_limiter


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    rate_limiter.reset()


USER_PAYLOAD = {
    "username": "hunter",
    "email": "Hunter@Example.com",
    "password": "secret123",
    "weight": 70,
    "height": 175,
}


@pytest.fixture()
def registered(client):
    """Register the default user; returns the register response body."""
    response = client.post("/api/v1/auth/register", json=USER_PAYLOAD)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def auth_headers(registered):
    return {"Authorization": f"Bearer {registered['access_token']}"}
