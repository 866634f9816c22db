"""User Service — registration, listing, and account management on top of a UserStore.

Invariants:
    - Every rule is evaluated before anything is persisted; any field error → FailedValidationError
      and the store is left untouched
    - The store is always an explicit argument (never imported)
    - Passwords are hashed off the event loop; plaintext never reaches the store
    - UserNotFoundError from a lookup-before-validate is an expected outcome, not an error

Design Decisions:
    - Query parameters parsed here, not by FastAPI, so a bad value becomes a field error
      with the same 422 shape as body rules
"""

import logging
import re
import uuid

from starlette.concurrency import run_in_threadpool

from userapi.core.domain_types import (
    DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE,
    User, UserId, UserListParams, UsersList,
)
from userapi.core.errors import (
    ErrorContext, FailedValidationError, NotPermittedError,
    UserExistsError, UserNotFoundError,
)
from userapi.core.password import (
    COMMON_PASSWORDS, MAX_PASSWORD_BYTES, MIN_PASSWORD_BYTES,
    hash_password, password_length,
)
from userapi.core.repository_protocols import UserStore
from userapi.core.validator import EMAIL_RX, Validator, matches, not_in
from userapi.schemas.user import AdminUpdate, PasswordUpdate, UserCreate

logger = logging.getLogger(__name__)

_INT_RX = re.compile(r"[+-]?[0-9]+")


async def create_user(
    store: UserStore, body: UserCreate, bcrypt_rounds: int,
) -> User:
    """Validate a registration and insert the new user."""
    existing = await _find_by_email(store, body.email)

    v = Validator()
    v.check_field(body.email != "", "email", "Email is required")
    v.check_field(matches(body.email, EMAIL_RX), "email", "Must be a valid email address")
    v.check_field(existing is None, "email", "Email is already in use")
    check_password(v, body.password)
    if v.has_errors:
        raise FailedValidationError(v.field_errors)

    hashed = await run_in_threadpool(hash_password, body.password, bcrypt_rounds)
    try:
        user = await store.user_insert(
            body.email, hashed, UserId(uuid.uuid4()), body.admin,
        )
    except UserExistsError:
        # lost a race with a concurrent registration for the same email
        raise FailedValidationError({"email": "Email is already in use"})

    logger.info("Created user", extra={"user_id": str(user.id)})
    return user


async def list_users(
    store: UserStore, page_number: str | None, page_size: str | None,
) -> UsersList:
    """Parse paging query parameters and return one page of users."""
    number = _parse_int(page_number, DEFAULT_PAGE_NUMBER)
    size = _parse_int(page_size, DEFAULT_PAGE_SIZE)

    v = Validator()
    v.check_field(size is not None and size > 0, "pageSize", "pageSize must be a positive integer")
    v.check_field(number is not None and number > 0, "pageNumber", "pageNumber must be a positive integer")
    if v.has_errors:
        raise FailedValidationError(v.field_errors)

    return await store.user_list(UserListParams(page_number=number, page_size=size))


async def retrieve_user(store: UserStore, user_id: UserId) -> User:
    return await store.user_retrieve(user_id)


async def change_password(
    store: UserStore, actor: User, user_id: UserId,
    body: PasswordUpdate, bcrypt_rounds: int,
) -> None:
    """Replace a user's password; allowed for the user themself or an admin."""
    if actor.id != user_id and not actor.admin:
        raise NotPermittedError(ErrorContext(user_id=str(actor.id)))

    v = Validator()
    check_password(v, body.password)
    if v.has_errors:
        raise FailedValidationError(v.field_errors)

    hashed = await run_in_threadpool(hash_password, body.password, bcrypt_rounds)
    await store.user_update_password(user_id, hashed)
    logger.info("Changed password", extra={"user_id": str(user_id)})


async def set_admin(
    store: UserStore, actor: User, user_id: UserId, body: AdminUpdate,
) -> None:
    if not actor.admin:
        raise NotPermittedError(ErrorContext(user_id=str(actor.id)))

    v = Validator()
    v.check_field(body.admin is not None, "admin", "Admin is required")
    if v.has_errors:
        raise FailedValidationError(v.field_errors)

    await store.user_update_admin(user_id, body.admin)
    logger.info(f"Set admin={body.admin}", extra={"user_id": str(user_id)})


async def delete_user(store: UserStore, actor: User, user_id: UserId) -> None:
    if not actor.admin:
        raise NotPermittedError(ErrorContext(user_id=str(actor.id)))
    await store.user_delete(user_id)
    logger.info("Deleted user", extra={"user_id": str(user_id)})


def check_password(v: Validator, password: str) -> None:
    """Apply the password rules shared by registration and password change."""
    length = password_length(password)
    v.check_field(password != "", "password", "Password is required")
    v.check_field(length >= MIN_PASSWORD_BYTES, "password", "Password is too short")
    v.check_field(length <= MAX_PASSWORD_BYTES, "password", "Password is too long")
    v.check_field(not_in(password, *COMMON_PASSWORDS), "password", "Password is too common")


async def _find_by_email(store: UserStore, email: str) -> User | None:
    try:
        return await store.user_retrieve_by_email(email)
    except UserNotFoundError:
        return None


def _parse_int(raw: str | None, default: int) -> int | None:
    if raw is None or raw == "":
        return default
    if not _INT_RX.fullmatch(raw):
        return None
    return int(raw)
