"""Pytest configuration and shared fixtures."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "subjects_test")

from main import app as fastapi_app  # noqa: E402
from subjects_api.database import get_db  # noqa: E402
from subjects_api.repositories.subjects import SubjectRepository  # noqa: E402

USERS = [
    {"user_id": "S1", "name": "Ada", "email": "ada@example.com", "role": "student"},
    {"user_id": "S2", "name": "Grace", "email": "grace@example.com", "role": "student"},
    {"user_id": "S3", "name": "Alan", "email": "alan@example.com", "role": "student"},
]


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory Motor database seeded with a few users"""
    client = AsyncMongoMockClient()
    database = client["subjects_test"]
    await database.users.insert_many([dict(u) for u in USERS])
    return database


@pytest.fixture
def repo(db) -> SubjectRepository:
    return SubjectRepository(db)


@pytest.fixture
def app(db):
    fastapi_app.dependency_overrides[get_db] = lambda: db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async client over ASGI; the lifespan (real Mongo client) is not run"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client
