"""Service test fixtures — async DB, in-memory gateway, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine
    - fake_repository implements the UserRepository protocol without SQL

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: all sessions share the single in-memory connection
"""

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from user_management.core.domain_types import UserId
from user_management.core.user_aggregate import User
from user_management.db.base import Base
from user_management.infrastructure.database import get_db, DatabaseSessionManager
import user_management.infrastructure.database as db_module
import user_management.models  # noqa: F401
from user_management.main import app


class InMemoryUserRepository:
    """UserRepository over a dict — records every write for assertions."""

    def __init__(self):
        self.rows: dict[int, User] = {}
        self.writes: list[str] = []
        self._next_id = 1

    async def insert(self, name, date_of_birth):
        now = datetime.now(timezone.utc)
        user = User(
            id=UserId(self._next_id), name=name, date_of_birth=date_of_birth,
            created_at=now, updated_at=now,
        )
        self.rows[user.id] = user
        self._next_id += 1
        self.writes.append("insert")
        return user

    async def find_by_id(self, user_id):
        return self.rows.get(user_id)

    async def update(self, user_id, name, date_of_birth):
        self.writes.append("update")
        if user_id not in self.rows:
            return None
        user = replace(
            self.rows[user_id], name=name, date_of_birth=date_of_birth,
            updated_at=datetime.now(timezone.utc),
        )
        self.rows[user_id] = user
        return user

    async def delete(self, user_id):
        self.writes.append("delete")
        return self.rows.pop(user_id, None) is not None

    async def list_page(self, limit, offset):
        return [self.rows[k] for k in sorted(self.rows)][offset:offset + limit]

    async def list_all(self):
        return [self.rows[k] for k in sorted(self.rows)]

    async def count(self):
        return len(self.rows)


@pytest.fixture
def fake_repository():
    return InMemoryUserRepository()


@pytest.fixture
def fixed_today():
    return date(2024, 5, 10)


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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
