"""SQL User Store — relational UserStore on SQLAlchemy async sessions.

Invariants:
    - Every mutation (insert, update, delete) runs in one scoped transaction:
      commit on success, rollback on any failure or early exit
    - Unique-constraint violation on insert → UserExistsError; any other failure → DatabaseError
    - Zero rows affected on update/delete is the only UserNotFoundError signal for those paths
    - Listing order is (created, id)

Design Decisions:
    - Constraint violations detected by driver error code (PostgreSQL SQLSTATE 23505,
      SQLite extended result codes), never by message text
    - Rows are converted to frozen domain Users before leaving the store
"""

import logging
import sqlite3
from datetime import timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from userapi.core.domain_types import (
    User, UserId, UserListParams, UsersList, total_pages,
)
from userapi.core.errors import DatabaseError, UserExistsError, UserNotFoundError
from userapi.infrastructure.database import DatabaseSessionManager
from userapi.models.user import User as UserModel

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_VIOLATIONS = frozenset({
    sqlite3.SQLITE_CONSTRAINT_UNIQUE,
    sqlite3.SQLITE_CONSTRAINT_PRIMARYKEY,
})


class SqlUserStore:
    """UserStore backed by the users table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def user_insert(
        self, email: str, hashed_password: str, id: UserId, admin: bool,
    ) -> User:
        try:
            async with self._db.transaction() as session:
                row = UserModel(
                    id=id, email=email,
                    hashed_password=hashed_password, admin=admin,
                )
                session.add(row)
                await session.flush()
                user = _to_domain(row)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise UserExistsError(email) from e
            logger.error(f"DB integrity error on user insert: {e}")
            raise DatabaseError("Integrity constraint violated", "insert") from e
        return user

    async def user_list(self, params: UserListParams) -> UsersList:
        async with self._db.session() as session:
            total = await session.scalar(
                select(func.count()).select_from(UserModel),
            ) or 0
            rows = []
            # offset < total keeps both bounds inside the driver integer range
            if params.offset < total:
                result = await session.execute(
                    select(UserModel)
                    .order_by(UserModel.created, UserModel.id)
                    .offset(params.offset)
                    .limit(min(params.page_size, total)),
                )
                rows = result.scalars().all()
        return UsersList(
            data=[_to_domain(r) for r in rows],
            total=total,
            pages=total_pages(total, params.page_size),
            page=params.page_number,
            page_size=params.page_size,
        )

    async def user_retrieve_by_email(self, email: str) -> User:
        async with self._db.session() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise UserNotFoundError(email)
        return _to_domain(row)

    async def user_retrieve(self, id: UserId) -> User:
        async with self._db.session() as session:
            row = await session.get(UserModel, id)
        if row is None:
            raise UserNotFoundError(str(id))
        return _to_domain(row)

    async def user_update_password(
        self, id: UserId, hashed_password: str,
    ) -> None:
        await self._update(id, hashed_password=hashed_password)

    async def user_update_admin(self, id: UserId, admin: bool) -> None:
        await self._update(id, admin=admin)

    async def user_delete(self, id: UserId) -> None:
        async with self._db.transaction() as session:
            result = await session.execute(
                delete(UserModel).where(UserModel.id == id),
            )
            if result.rowcount == 0:
                raise UserNotFoundError(str(id))

    async def _update(self, id: UserId, **values: object) -> None:
        async with self._db.transaction() as session:
            result = await session.execute(
                update(UserModel).where(UserModel.id == id).values(**values),
            )
            if result.rowcount == 0:
                raise UserNotFoundError(str(id))


def is_unique_violation(e: IntegrityError) -> bool:
    """True when the driver reports a unique/primary-key constraint violation."""
    orig = e.orig
    if getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    return getattr(orig, "sqlite_errorcode", None) in SQLITE_UNIQUE_VIOLATIONS


def _to_domain(row: UserModel) -> User:
    created = row.created
    if created.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC
        created = created.replace(tzinfo=timezone.utc)
    return User(
        id=UserId(row.id),
        email=row.email,
        admin=row.admin,
        created=created,
        hashed_password=row.hashed_password,
    )
