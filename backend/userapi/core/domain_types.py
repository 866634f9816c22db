"""Domain Types — the User entity and the paginated listing descriptors.

Invariants:
    - User.hashed_password never appears in repr()
    - UsersList.pages == ceil(total / page_size) (0 when there are no users)
    - UserListParams is a query descriptor only; callers validate page_size > 0

Design Decisions:
    - Frozen dataclasses: the store owns consistency, handlers never mutate records
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType
from uuid import UUID


UserId = NewType("UserId", UUID)

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class User:
    """A stored user account."""
    id: UserId
    email: str
    admin: bool
    created: datetime
    hashed_password: str = field(default="", repr=False)


@dataclass(frozen=True)
class UserListParams:
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class UsersList:
    """One page of users plus totals."""
    data: list[User]
    total: int
    pages: int
    page: int
    page_size: int


def total_pages(total: int, page_size: int) -> int:
    return -(-total // page_size)
