"""
Shared fixtures for the subscriptions test suite.

The store is an in-memory SQLite database shared through a StaticPool, so
every session in a test sees the same tables.
"""

from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from subs_api.api.v1.deps import get_database, get_subscription_service
from subs_api.db.session import Database
from subs_api.main import app
from subs_api.schemas.subscription import SubscriptionCreate
from subs_api.services.subscription_service import SubscriptionService


USER_ID = UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")
OTHER_USER_ID = UUID("11111111-2222-3333-4444-555555555555")


@pytest.fixture
def database():
    """Initialised in-memory database with all tables created."""
    db = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.init()
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def service(database):
    return SubscriptionService(database)


@pytest.fixture
def make_subscription(service):
    """Insert a subscription and return its id."""

    def _make(
        service_name: str = "Yandex Plus",
        price: int = 400,
        start_date: str = "07-2025",
        end_date: str = None,
        user_id: UUID = USER_ID,
    ) -> UUID:
        created = service.create(
            SubscriptionCreate(
                user_id=user_id,
                service_name=service_name,
                price=price,
                start_date=start_date,
                end_date=end_date,
            )
        )
        return created.id

    return _make


@pytest.fixture
def client(database, service):
    """
    TestClient bound to the test database.

    Not entered as a context manager, so the startup handler (which would
    connect to PostgreSQL) does not run.
    """
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_subscription_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
