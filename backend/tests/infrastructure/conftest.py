"""Store contract fixtures — every contract test runs against both UserStore implementations."""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from userapi.infrastructure.database import DatabaseSessionManager
from userapi.infrastructure.memory_store import InMemoryUserStore
from userapi.infrastructure.sql_store import SqlUserStore


@pytest.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    manager = DatabaseSessionManager(engine)
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture(params=["memory", "sql"])
async def user_store(request, db):
    if request.param == "memory":
        return InMemoryUserStore()
    return SqlUserStore(db)
