"""
Test fixtures for the HelloWorld API.

Every test gets its own in-memory mongomock database behind the real app,
wrapped so the services can await it like motor. Users are registered
through the API so tokens are genuine.
"""

import asyncio

import mongomock
import pytest
from fastapi.testclient import TestClient

from helloworld.core.database import use_database
from helloworld.main import app

PASSWORD = "secret123"

# ==================== ASYNC DATABASE DOUBLE ====================

class AsyncMockCursor:
    """find()/aggregate() result with motor's chaining and to_list()"""
    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, *args, **kwargs):
        self._cursor = self._cursor.sort(*args, **kwargs)
        return self

    def limit(self, count):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs if length is None else docs[:length]


class AsyncMockCollection:
    """Every other collection method becomes a coroutine"""
    def __init__(self, collection):
        self._collection = collection

    def find(self, *args, **kwargs):
        return AsyncMockCursor(self._collection.find(*args, **kwargs))

    def aggregate(self, pipeline, **kwargs):
        return AsyncMockCursor(self._collection.aggregate(pipeline, **kwargs))

    def __getattr__(self, name):
        method = getattr(self._collection, name)

        async def call(*args, **kwargs):
            return method(*args, **kwargs)

        return call


class AsyncMockDatabase:
    def __init__(self, database):
        self._database = database

    def __getattr__(self, name):
        return AsyncMockCollection(self._database[name])

    __getitem__ = __getattr__


@pytest.fixture
def db():
    """Fresh in-memory database, swapped in for the process-wide one."""
    database = AsyncMockDatabase(mongomock.MongoClient()["helloworld_test"])
    use_database(database)
    yield database
    use_database(None)


@pytest.fixture
def client(db):
    """Test client; entering it runs startup, which builds the indexes."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run():
    """Run a coroutine (direct service/database calls) to completion."""
    return asyncio.run


def register(client, name, email, role="student", password=PASSWORD):
    resp = client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "role": role,
    })
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {
        "user_id": body["user"]["user_id"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
        "user": body["user"],
    }


@pytest.fixture
def teacher(client):
    return register(client, "Ms. Rivera", "rivera@school.test", role="teacher")


@pytest.fixture
def other_teacher(client):
    return register(client, "Mr. Okafor", "okafor@school.test", role="teacher")


@pytest.fixture
def student(client):
    return register(client, "Aiko", "aiko@school.test")


@pytest.fixture
def other_student(client):
    return register(client, "Ben", "ben@school.test")


@pytest.fixture
def enrolled_class(client, teacher, student):
    """A class owned by `teacher` that `student` has joined."""
    resp = client.post("/api/class/create", json={"name": "Japanese 101"}, headers=teacher["headers"])
    assert resp.status_code == 201, resp.text
    teacher_class = resp.json()["class"]

    resp = client.post("/api/class/join", json={"code": teacher_class["code"]}, headers=student["headers"])
    assert resp.status_code == 200, resp.text
    return teacher_class


@pytest.fixture
def make_user(client):
    """Register an extra user: make_user(name, email, role="student")."""
    def _make(name, email, role="student"):
        return register(client, name, email, role=role)
    return _make
