"""User Schemas — Pydantic models for request bodies and response envelopes.

Invariants:
    - Request bodies are strict JSON objects: unknown keys and wrong JSON types are rejected
      (mapped to 400 by api/error_handlers.py), business rules are NOT checked here
    - Missing fields default to empty values so the field validator reports them
    - Response models never carry the password or its hash

Design Decisions:
    - Business rules live in services (core/validator.py) so every rule is reported together,
      including the ones that need a store lookup
    - Authentication body accepts "Email"/"Password" as well as lowercase keys
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from userapi.core.domain_types import User, UsersList


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class UserCreate(_Body):
    """POST /users body."""
    email: str = ""
    password: str = ""
    admin: bool = False


class AuthenticationRequest(_Body):
    """POST /authentication-tokens body."""
    email: str = Field("", validation_alias=AliasChoices("email", "Email"))
    password: str = Field("", validation_alias=AliasChoices("password", "Password"))


class PasswordUpdate(_Body):
    """PUT /users/{id}/password body."""
    password: str = ""


class AdminUpdate(_Body):
    """PUT /users/{id}/admin body."""
    admin: bool | None = None


class UserResponse(BaseModel):
    """Public view of a user."""
    email: str
    id: UUID
    admin: bool
    created: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            email=user.email, id=user.id,
            admin=user.admin, created=user.created,
        )


class UserEnvelope(BaseModel):
    """Single-user response: {"Data": {...}}."""
    model_config = ConfigDict(populate_by_name=True)

    data: UserResponse = Field(alias="Data")


class UsersListResponse(BaseModel):
    """One page of users with totals and the echoed page descriptor."""
    model_config = ConfigDict(populate_by_name=True)

    data: list[UserResponse]
    total: int
    pages: int
    page: int
    page_size: int = Field(alias="pageSize")

    @classmethod
    def from_list(cls, users: UsersList) -> "UsersListResponse":
        return cls(
            data=[UserResponse.from_user(u) for u in users.data],
            total=users.total,
            pages=users.pages,
            page=users.page,
            page_size=users.page_size,
        )


class TokenResponse(BaseModel):
    """Issued bearer credential."""
    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(alias="AuthenticationToken")
    expiry: datetime = Field(alias="AuthenticationTokenExpiry")
