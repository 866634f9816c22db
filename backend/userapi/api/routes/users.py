"""User Routes — registration, listing, and account management.

Invariants:
    - Routes only translate HTTP ↔ service calls; every rule lives in services/users.py
    - Responses never include the password or its hash
    - Management routes (/users/{id}...) require an authenticated user
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from userapi.api.deps import get_app_settings, get_store, require_authenticated_user
from userapi.config import Settings
from userapi.core.domain_types import User, UserId
from userapi.core.repository_protocols import UserStore
from userapi.schemas.user import (
    AdminUpdate, PasswordUpdate, UserCreate, UserEnvelope,
    UserResponse, UsersListResponse,
)
from userapi.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "", response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new user."""
    user = await user_service.create_user(store, body, settings.bcrypt_rounds)
    return UserEnvelope(data=UserResponse.from_user(user))


@router.get("", response_model=UsersListResponse)
async def list_users(
    page_number: str | None = Query(None, alias="pageNumber"),
    page_size: str | None = Query(None, alias="pageSize"),
    store: UserStore = Depends(get_store),
):
    """List users one page at a time."""
    users = await user_service.list_users(store, page_number, page_size)
    return UsersListResponse.from_list(users)


@router.get("/{user_id}", response_model=UserEnvelope)
async def retrieve_user(
    user_id: UUID,
    store: UserStore = Depends(get_store),
    _: User = Depends(require_authenticated_user),
):
    user = await user_service.retrieve_user(store, UserId(user_id))
    return UserEnvelope(data=UserResponse.from_user(user))


@router.put("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    user_id: UUID,
    body: PasswordUpdate,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    actor: User = Depends(require_authenticated_user),
):
    await user_service.change_password(
        store, actor, UserId(user_id), body, settings.bcrypt_rounds,
    )


@router.put("/{user_id}/admin", status_code=status.HTTP_204_NO_CONTENT)
async def set_admin(
    user_id: UUID,
    body: AdminUpdate,
    store: UserStore = Depends(get_store),
    actor: User = Depends(require_authenticated_user),
):
    await user_service.set_admin(store, actor, UserId(user_id), body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    store: UserStore = Depends(get_store),
    actor: User = Depends(require_authenticated_user),
):
    await user_service.delete_user(store, actor, UserId(user_id))
