"""Configuration — environment-driven settings shared by the app and migrations.

Tests cover:
    - postgresql:// URLs get the asyncpg driver; other URLs pass through
    - Importing userapi.models registers the users table on Base.metadata
"""

from datetime import timedelta

import userapi.models  # noqa: F401
from userapi.config import Settings
from userapi.db.base import Base


def test_plain_postgres_url_gets_asyncpg_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/users")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/users"


def test_sqlite_url_unchanged(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    assert Settings().database_url == "sqlite+aiosqlite:///:memory:"


def test_access_token_ttl_from_hours(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "2")
    assert Settings().access_token_ttl == timedelta(hours=2)


def test_models_register_users_table():
    table = Base.metadata.tables["users"]
    assert {"id", "email", "hashed_password", "admin", "created"} <= set(table.columns.keys())
