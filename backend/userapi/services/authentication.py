"""Authentication Service — credential checks, token issuance, and bearer-token resolution.

Invariants:
    - Unknown email and wrong password both end in FailedValidationError (422), never 401/404
    - Password rules are only evaluated when the email resolved to a user
    - A token naming a user that no longer exists is an invalid token
"""

import logging

from starlette.concurrency import run_in_threadpool

from userapi.core.domain_types import User
from userapi.core.errors import (
    FailedValidationError, InvalidAuthenticationTokenError, UserNotFoundError,
)
from userapi.core.password import password_matches
from userapi.core.repository_protocols import UserStore
from userapi.core.validator import Validator
from userapi.infrastructure.tokens import AuthenticationToken, TokenIssuer
from userapi.schemas.user import AuthenticationRequest

logger = logging.getLogger(__name__)


async def issue_token(
    store: UserStore, issuer: TokenIssuer, body: AuthenticationRequest,
) -> AuthenticationToken:
    """Check email/password and issue a bearer token for the user."""
    try:
        user = await store.user_retrieve_by_email(body.email)
    except UserNotFoundError:
        user = None

    v = Validator()
    v.check_field(body.email != "", "email", "Email is required")
    v.check_field(user is not None, "email", "Email address could not be found")
    if user is not None:
        matched = await run_in_threadpool(
            password_matches, body.password, user.hashed_password,
        )
        v.check_field(body.password != "", "password", "Password is required")
        v.check_field(matched, "password", "Password is incorrect")
    if v.has_errors:
        raise FailedValidationError(v.field_errors)

    token = issuer.issue(user.id)
    logger.info("Issued authentication token", extra={"user_id": str(user.id)})
    return token


async def user_for_token(
    store: UserStore, issuer: TokenIssuer, token: str,
) -> User:
    """Resolve a bearer token to its user."""
    user_id = issuer.decode(token)
    try:
        return await store.user_retrieve(user_id)
    except UserNotFoundError as e:
        raise InvalidAuthenticationTokenError() from e
