import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from finance_tracker import database
from finance_tracker.config import Settings
from finance_tracker.schemas import TransactionRead
from finance_tracker.server import create_app
from finance_tracker.storage import DatabaseStorage, MemStorage


@pytest.fixture(scope="function")
def engine():
    """
    In-memory SQLite engine with the schema created; one connection shared across threads.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_storage(engine):
    return DatabaseStorage(database.make_session_factory(engine))


@pytest.fixture(scope="function")
def mem_storage():
    return MemStorage()


@pytest.fixture(params=["memory", "database"])
def storage(request, mem_storage, db_storage):
    """Runs a test once against each storage implementation."""
    return mem_storage if request.param == "memory" else db_storage


@pytest.fixture
def settings():
    return Settings(storage_backend="memory", session_secret="test-secret", log_level="WARNING")


@pytest.fixture
def client(storage, settings):
    app = create_app(storage=storage, settings=settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client):
    """Client with a registered, logged-in user."""
    resp = client.post(
        "/api/register",
        json={"username": "alice", "password": "secret123", "fullName": "Alice Doe"},
    )
    assert resp.status_code == 201
    return client


@pytest.fixture
def make_txn():
    counter = {"id": 0}

    def _make(type, amount, category="Others", date=None, user_id=1):
        counter["id"] += 1
        return TransactionRead(
            id=counter["id"],
            user_id=user_id,
            description=f"txn {counter['id']}",
            amount=amount,
            category=category,
            type=type,
            date=date or datetime.datetime(2024, 5, 10, 12, 0),
        )

    return _make
