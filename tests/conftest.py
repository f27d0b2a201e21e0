"""
Pytest fixtures for testing
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.infrastructure.store.entry_store import EntryStore
from app.main import create_app

# Wednesday; the week started on Sunday 2026-03-15, the month on Sunday 2026-03-01
FIXED_NOW = datetime(2026, 3, 18, 14, 30, 0)


class FakeClock:
    """Управляемые часы для хранилища"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def store(clock):
    """Fresh in-memory store for each test"""
    store = EntryStore(clock=clock)
    yield store
    store.dispose()


@pytest.fixture
def db_session(store):
    """Unit of work over the test store (holds the store lock)"""
    with store.session() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(SEED_DEFAULT_CATEGORIES=False, RECENT_ACTIVITIES_LIMIT=5)


@pytest.fixture
def client(settings, store):
    """Test client для FastAPI поверх тестового хранилища"""
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
