import mongomock
import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from app.infrastructure.db import mongo
from app.main import app
from app.services import password_service


@pytest.fixture
def db(monkeypatch):
    """In-memory Mongo (mongomock) wired in place of the real database."""
    client = mongomock.MongoClient()
    database = client["notes_test"]
    monkeypatch.setattr(mongo, "_db", database)
    yield database
    client.close()


@pytest.fixture(autouse=True)
def fast_hasher(monkeypatch):
    """Cheap argon2 parameters so user creation stays fast in tests."""
    monkeypatch.setattr(password_service, "ph", PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def client():
    # Without the context manager the startup hook (real Mongo connection) does not run.
    return TestClient(app)


@pytest.fixture
def alice(db):
    from app.services import user_service

    return user_service.create_user("alice", "alice@example.com", "alicepassword123")


def gql(client, query, variables=None):
    """POST a GraphQL document and return the decoded body."""
    resp = client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert resp.status_code == 200
    return resp.json()
