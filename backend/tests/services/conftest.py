"""Service test fixtures — FastAPI app with an injected store + async HTTP client.

Invariants:
    - Every test gets a fresh InMemoryUserStore (or a fresh in-memory SQLite store via sql_client)
    - The store is injected through create_app(store=...), no dependency overrides needed
    - register_user / login helpers go through the real HTTP routes
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from userapi.config import get_settings
from userapi.infrastructure.database import DatabaseSessionManager
from userapi.infrastructure.memory_store import InMemoryUserStore
from userapi.infrastructure.sql_store import SqlUserStore
from userapi.main import create_app

PASSWORD = "qweqweqwe"


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=get_settings())


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def sql_store():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    db = DatabaseSessionManager(engine)
    await db.create_all()
    yield SqlUserStore(db)
    await db.dispose()


@pytest.fixture
async def sql_client(sql_store):
    app = create_app(store=sql_store, settings=get_settings())
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def register_user(client):
    """POST /users and return the created user's public data."""
    async def _register(email: str, password: str = PASSWORD, admin: bool = False):
        res = await client.post(
            "/users", json={"email": email, "password": password, "admin": admin},
        )
        assert res.status_code == 201, res.text
        return res.json()["Data"]
    return _register


@pytest.fixture
def login(client):
    """POST /authentication-tokens and return Authorization headers."""
    async def _login(email: str, password: str = PASSWORD) -> dict:
        res = await client.post(
            "/authentication-tokens", json={"email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['AuthenticationToken']}"}
    return _login
