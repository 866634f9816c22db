"""Boundary Protocols — the persistence contract between services and stores.

Invariants:
    - Services NEVER import a concrete store — they receive a UserStore
    - user_insert raises UserExistsError for a duplicate email
    - retrieve/update/delete raise UserNotFoundError when no user matches
    - Infrastructure failures surface as DatabaseError, never as a sentinel

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
      (InMemoryUserStore and SqlUserStore share no base class)
    - Async in Protocol: the relational implementation does IO
"""

from typing import Protocol

from userapi.core.domain_types import User, UserId, UserListParams, UsersList


class UserStore(Protocol):
    """Contract for user persistence — implemented by infrastructure."""
    async def user_insert(
        self, email: str, hashed_password: str, id: UserId, admin: bool,
    ) -> User: ...
    async def user_list(self, params: UserListParams) -> UsersList: ...
    async def user_retrieve_by_email(self, email: str) -> User: ...
    async def user_retrieve(self, id: UserId) -> User: ...
    async def user_update_password(
        self, id: UserId, hashed_password: str,
    ) -> None: ...
    async def user_update_admin(self, id: UserId, admin: bool) -> None: ...
    async def user_delete(self, id: UserId) -> None: ...
