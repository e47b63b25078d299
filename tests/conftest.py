import os

os.environ.setdefault("TESTING", "true")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from url_registry.core.config import settings
settings.testing = True

from url_registry.main import app as fastapi_app
from url_registry.db.connection import get_db_async, Base
from url_registry.db import models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def anyio_backend():
    return 'asyncio'

# --- SQL store (SQLite in-memory) ---
@pytest_asyncio.fixture
async def engine():
    # StaticPool keeps every session on the one in-memory database
    test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, autoflush=False, expire_on_commit=False, class_=AsyncSession)

@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session

@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db_async():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db_async] = override_get_db_async

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c

    fastapi_app.dependency_overrides.clear()


class BrokenSession:
    """Stands in for a session whose database has gone away."""

    def __init__(self):
        self.rollbacks = 0

    def _error(self):
        return OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def execute(self, *args, **kwargs):
        raise self._error()

    def add(self, instance):
        pass

    async def commit(self):
        raise self._error()

    async def rollback(self):
        self.rollbacks += 1

    async def close(self):
        pass

@pytest.fixture
def broken_session():
    return BrokenSession()

@pytest_asyncio.fixture
async def broken_client(broken_session):
    async def override_get_db_async():
        yield broken_session

    fastapi_app.dependency_overrides[get_db_async] = override_get_db_async

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c

    fastapi_app.dependency_overrides.clear()
