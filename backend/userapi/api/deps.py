"""Request Dependencies — store, settings, token issuer, and the authenticated user.

Invariants:
    - Everything a route needs comes from app.state (set once by create_app), never module globals
    - authenticate() runs for every request: no Authorization header → anonymous (None);
      a present but invalid bearer token → 401 even on public routes
    - request.state.authenticated_user is the single request-scoped "current user or None"
"""

from fastapi import Depends, Request, Response

from userapi.config import Settings
from userapi.core.domain_types import User
from userapi.core.errors import (
    AuthenticationRequiredError, InvalidAuthenticationTokenError,
)
from userapi.core.repository_protocols import UserStore
from userapi.infrastructure.tokens import TokenIssuer
from userapi.services.authentication import user_for_token


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


async def authenticate(
    request: Request,
    response: Response,
    store: UserStore = Depends(get_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> User | None:
    """Resolve the bearer token (if any) into request.state.authenticated_user."""
    response.headers["Vary"] = "Authorization"
    request.state.authenticated_user = None

    header = request.headers.get("Authorization")
    if not header:
        return None

    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token:
        raise InvalidAuthenticationTokenError()

    user = await user_for_token(store, issuer, token)
    request.state.authenticated_user = user
    return user


def require_authenticated_user(
    user: User | None = Depends(authenticate),
) -> User:
    if user is None:
        raise AuthenticationRequiredError()
    return user
