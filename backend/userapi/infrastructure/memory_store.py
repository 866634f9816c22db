"""In-Memory User Store — list-backed UserStore for tests and local runs.

Invariants:
    - Insertion order is the listing order
    - Emails are unique (case-sensitive); a duplicate raises UserExistsError
    - Not durable; safe only within a single event loop (no locking)

Design Decisions:
    - Records are frozen dataclasses, updates swap in a replaced copy
"""

import dataclasses
import logging
from datetime import datetime, timezone

from userapi.core.domain_types import (
    User, UserId, UserListParams, UsersList, total_pages,
)
from userapi.core.errors import UserExistsError, UserNotFoundError

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """UserStore kept in a Python list."""

    def __init__(self) -> None:
        self._users: list[User] = []

    def __len__(self) -> int:
        return len(self._users)

    async def user_insert(
        self, email: str, hashed_password: str, id: UserId, admin: bool,
    ) -> User:
        if any(u.email == email for u in self._users):
            raise UserExistsError(email)
        user = User(
            id=id, email=email, admin=admin,
            created=datetime.now(timezone.utc),
            hashed_password=hashed_password,
        )
        self._users.append(user)
        return user

    async def user_list(self, params: UserListParams) -> UsersList:
        total = len(self._users)
        start = params.offset
        page = self._users[start:start + params.page_size] if start >= 0 else []
        return UsersList(
            data=list(page),
            total=total,
            pages=total_pages(total, params.page_size),
            page=params.page_number,
            page_size=params.page_size,
        )

    async def user_retrieve_by_email(self, email: str) -> User:
        for user in self._users:
            if user.email == email:
                return user
        raise UserNotFoundError(email)

    async def user_retrieve(self, id: UserId) -> User:
        return self._users[self._index_of(id)]

    async def user_update_password(
        self, id: UserId, hashed_password: str,
    ) -> None:
        i = self._index_of(id)
        self._users[i] = dataclasses.replace(
            self._users[i], hashed_password=hashed_password,
        )

    async def user_update_admin(self, id: UserId, admin: bool) -> None:
        i = self._index_of(id)
        self._users[i] = dataclasses.replace(self._users[i], admin=admin)

    async def user_delete(self, id: UserId) -> None:
        del self._users[self._index_of(id)]

    def _index_of(self, id: UserId) -> int:
        for i, user in enumerate(self._users):
            if user.id == id:
                return i
        raise UserNotFoundError(str(id))
