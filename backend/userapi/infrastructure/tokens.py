"""Authentication Tokens — signed, time-bounded JWT bearer credentials.

Invariants:
    - Every token carries sub (user id), iat, nbf, exp, iss and aud
    - iss and aud are both the service base URL; tokens for another audience are rejected
    - decode raises InvalidAuthenticationTokenError for any malformed, expired,
      mis-signed or mis-scoped token (never a raw PyJWT exception)

Design Decisions:
    - HMAC (HS256 by default) with a shared secret from settings: the service is both issuer and audience
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from userapi.core.domain_types import UserId
from userapi.core.errors import InvalidAuthenticationTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationToken:
    token: str
    expiry: datetime


@dataclass(frozen=True)
class TokenIssuer:
    """Issues and verifies tokens scoped to one base URL."""
    secret_key: str
    base_url: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=24)

    def issue(self, user_id: UserId, now: datetime | None = None) -> AuthenticationToken:
        now = (now or datetime.now(timezone.utc)).replace(microsecond=0)
        expiry = now + self.ttl
        claims = {
            "sub": str(user_id),
            "iat": now,
            "nbf": now,
            "exp": expiry,
            "iss": self.base_url,
            "aud": [self.base_url],
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        return AuthenticationToken(token=token, expiry=expiry)

    def decode(self, token: str) -> UserId:
        """Verify the token and return the user id it names."""
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.base_url,
                issuer=self.base_url,
                options={"require": ["sub", "exp", "iat", "iss", "aud"]},
            )
            return UserId(UUID(claims["sub"]))
        except (jwt.PyJWTError, ValueError) as e:
            logger.info(f"Rejected authentication token: {e}")
            raise InvalidAuthenticationTokenError() from e
