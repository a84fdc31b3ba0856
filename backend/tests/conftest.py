"""Root conftest — async DB, row store, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_settings overridden on the app; app.state.db set for readiness
    - FlakyStore wraps the real store and fails chosen (operation, table) pairs

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so rows committed by the app are visible to assertions through test_db
    - Failure injection by wrapping rather than mocking: the real SQL still runs
      for every step that is not told to fail
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

import pytest  # noqa: E402
from fastapi import Depends  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import namebind.models  # noqa: E402,F401
from namebind.api.deps import get_row_store  # noqa: E402
from namebind.config import Settings, get_settings  # noqa: E402
from namebind.core.errors import StoreError  # noqa: E402
from namebind.db.base import Base  # noqa: E402
from namebind.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from namebind.infrastructure.row_store import SqlRowStore  # noqa: E402
from namebind.main import app  # noqa: E402


class FlakyStore:
    """RowStore wrapper that raises StoreError for configured (operation, table) pairs."""

    def __init__(self, inner, failures: set[tuple[str, str]] | None = None):
        self.inner = inner
        self.failures = failures if failures is not None else set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        if (operation, table) in self.failures:
            raise StoreError("injected failure", operation, table)

    async def select(self, table, filters, limit=None):
        self._check("select", table)
        return await self.inner.select(table, filters, limit)

    async def select_one(self, table, filters):
        self._check("select", table)
        return await self.inner.select_one(table, filters)

    async def insert(self, table, rows):
        self._check("insert", table)
        return await self.inner.insert(table, rows)

    async def update(self, table, patch, filters):
        self._check("update", table)
        return await self.inner.update(table, patch, filters)

    async def delete(self, table, filters):
        self._check("delete", table)
        return await self.inner.delete(table, filters)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def store(test_db):
    return SqlRowStore(test_db)


@pytest.fixture
async def flaky_store(store):
    return FlakyStore(store)


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        admin_api_key=None,
        asset_auth_fail_open=True,
    )


@pytest.fixture
async def seed_topic(store):
    """Factory: insert a topic row with the given moderators value."""
    async def _seed(topic_id="topic-1", moderators=("pk_mod",), **fields):
        row = {
            "id": topic_id,
            "name": fields.pop("name", "Test topic"),
            "pubkey": fields.pop("pubkey", "pk_creator"),
            "moderators": list(moderators) if isinstance(moderators, tuple) else moderators,
            **fields,
        }
        return (await store.insert("topics", row))[0]
    return _seed


@pytest.fixture
async def client(test_engine, test_session_factory, test_settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    original_manager = getattr(app.state, "db", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db = original_manager


@pytest.fixture
def store_failures(client):
    """Route the app's row store through FlakyStore; returns the mutable failure set."""
    failures: set[tuple[str, str]] = set()

    def override_get_row_store(db: AsyncSession = Depends(get_db)):
        return FlakyStore(SqlRowStore(db), failures)

    app.dependency_overrides[get_row_store] = override_get_row_store
    return failures
