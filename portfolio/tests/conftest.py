"""
Pytest fixtures for the Portfolio API tests.
Uses in-memory SQLite, mocks Redis and the OpenAI client, provides an admin token.
"""
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = "sk-test"

from portfolio.app.db.base import Base
from portfolio.main import app
from portfolio.app.core.dependencies import get_db
from portfolio.app.core.security import create_access_token

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so app uses our test engine
import portfolio.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    """Factory for independent sessions (reads that bypass the identity map)."""
    return TestingSessionLocal


@pytest.fixture
def client(db_session):
    """TestClient with tables created."""
    return TestClient(app)


@pytest.fixture
def admin_headers():
    token = create_access_token(data={"sub": "admin", "email": "admin@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_client(client, admin_headers):
    client.headers.update(admin_headers)
    return client


@pytest.fixture(autouse=True)
def mock_redis():
    """Mock Redis cache: get returns None (cache miss), set/delete no-op. Skip connect."""
    with patch("portfolio.app.utils.cache.get", new_callable=AsyncMock, return_value=None), \
         patch("portfolio.app.utils.cache.set", new_callable=AsyncMock), \
         patch("portfolio.app.utils.cache.delete", new_callable=AsyncMock), \
         patch("portfolio.app.utils.cache.connect", new_callable=AsyncMock):
        yield


def make_completion(text="Hello there!", prompt_tokens=12, completion_tokens=8):
    """Shape of an OpenAI chat completion as far as the gateway reads it."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )


@pytest.fixture
def fake_openai():
    """Replace the OpenAI client; tests tune fake_openai.chat.completions.create."""
    fake = MagicMock()
    fake.chat.completions.create = AsyncMock(return_value=make_completion())
    with patch("portfolio.app.services.chat_completion._get_openai_client", return_value=fake):
        yield fake


@pytest.fixture
def completion_factory():
    return make_completion
