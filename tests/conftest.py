"""Pytest configuration and fixtures."""
from datetime import datetime, timezone

import pytest

from app import create_app
from config.context import AppContext
from services.waitlist_service import WAITLIST_TABLE
from stores.fake import FakeWaitlistStore


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(fixed_time: datetime) -> FakeWaitlistStore:
    """Provisioned, empty store."""
    return FakeWaitlistStore(
        tables={WAITLIST_TABLE: []},
        unique_fields={WAITLIST_TABLE: {'email'}},
        now=fixed_time,
    )


@pytest.fixture
def fresh_store() -> FakeWaitlistStore:
    """Store where the waitlist table was never created."""
    return FakeWaitlistStore()


@pytest.fixture
def context(store: FakeWaitlistStore) -> AppContext:
    return AppContext(store=store)


@pytest.fixture
def client(context: AppContext):
    app = create_app(context=context)
    app.config['TESTING'] = True
    return app.test_client()


@pytest.fixture
def fresh_client(fresh_store: FakeWaitlistStore):
    app = create_app(context=AppContext(store=fresh_store))
    app.config['TESTING'] = True
    return app.test_client()
