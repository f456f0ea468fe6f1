"""
Pytest configuration and shared fixtures for EventLens tests

Provides:
- Isolated in-memory SQLite database per test
- Test owners and applications
- Dict-backed mock Redis connection
- Controllable clock for TTL tests
"""

import os

# Settings are read at import time: point everything at local test doubles
# before any backend module is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-session-secret"

import pytest
from typing import Dict, Generator
from unittest.mock import MagicMock
from uuid import uuid4
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from backend.database import Base
from backend.models.owner import Owner
from backend.services.cache_service import CacheService
from backend.services.key_service import KeyService, IssuedKey


@pytest.fixture
def test_db_engine_sqlite():
    """Create in-memory SQLite database (fast, isolated per test)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_db_engine_sqlite) -> Generator[Session, None, None]:
    """Database session bound to the per-test engine"""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine_sqlite
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_owner(db: Session, email: str, name: str) -> Owner:
    owner = Owner(id=uuid4(), google_id=f"google-{uuid4().hex}", email=email, name=name)
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture
def test_owner(db_session) -> Owner:
    """Create the developer under test"""
    return _make_owner(db_session, "dev@example.com", "Dev One")


@pytest.fixture
def other_owner(db_session) -> Owner:
    """Create a second, unrelated developer"""
    return _make_owner(db_session, "other@example.com", "Dev Two")


@pytest.fixture
def issued_key(db_session, test_owner) -> IssuedKey:
    """Register application "Shop" for test_owner"""
    return KeyService(db_session).issue(test_owner.id, "Shop", "shop.example.com")


@pytest.fixture
def mock_redis():
    """Mock Redis connection backed by a dict"""
    store: Dict[str, str] = {}

    def setex(key, ttl, value):
        store[key] = value
        return True

    mock = MagicMock()
    mock.ping.return_value = True
    mock.get.side_effect = lambda key: store.get(key)
    mock.setex.side_effect = setex
    mock.store = store
    return mock


@pytest.fixture
def summary_cache(mock_redis) -> CacheService:
    """CacheService wired to the mock Redis"""
    return CacheService(client=mock_redis, enabled=True)


class FakeClock:
    """Monotonic clock that only moves when told to"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for API endpoints"
    )
