"""Authentication Routes — token issuance and the protected probe.

Invariants:
    - POST /authentication-tokens returns 200 with a bearer token or 422 field errors
    - GET /protected is reachable only with a valid bearer token
"""

from fastapi import APIRouter, Depends

from userapi.api.deps import get_store, get_token_issuer, require_authenticated_user
from userapi.core.domain_types import User
from userapi.core.repository_protocols import UserStore
from userapi.infrastructure.tokens import TokenIssuer
from userapi.schemas.user import AuthenticationRequest, TokenResponse
from userapi.services.authentication import issue_token

router = APIRouter(tags=["authentication"])


@router.post("/authentication-tokens", response_model=TokenResponse)
async def create_authentication_token(
    body: AuthenticationRequest,
    store: UserStore = Depends(get_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Exchange email/password for a signed bearer token."""
    token = await issue_token(store, issuer, body)
    return TokenResponse(token=token.token, expiry=token.expiry)


@router.get("/protected")
async def protected(user: User = Depends(require_authenticated_user)):
    return {"Message": "This is a protected handler"}
