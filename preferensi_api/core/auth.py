# preferensi_api/core/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import (
    APIKeyCookie,
    APIKeyHeader,
    APIKeyQuery,
    HTTPAuthorizationCredentials,
    HTTPBearer,
)
from jose import jwt, JWTError
from pydantic import BaseModel

from preferensi_api.core.config import Settings, get_settings_dep

# Token locations, checked in this order. All use auto_error=False so a
# missing token falls through to the next location instead of raising.
bearer_scheme = HTTPBearer(auto_error=False)
access_token_header = APIKeyHeader(name="x-access-token", auto_error=False)
token_cookie = APIKeyCookie(name="token", auto_error=False)
token_query = APIKeyQuery(name="token", auto_error=False)


class TokenIdentity(BaseModel):
    """Verified identity carried by an access token."""

    user_id: str
    email: str | None = None


def create_access_token(
    settings: Settings,
    user_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed access token with claims {user_id, email, iat, exp}.

    Expiry defaults to TOKEN_EXPIRE_DAYS from settings.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.TOKEN_EXPIRE_DAYS)

    claims = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, settings.TOKEN_KEY, algorithm=settings.TOKEN_ALG)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Decode and verify an access token.

    Verification:
      - signature (TOKEN_ALG using TOKEN_KEY)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(token, settings.TOKEN_KEY, algorithms=[settings.TOKEN_ALG])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Token",
        )


def extract_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    header_token: str | None = Depends(access_token_header),
    cookie_token: str | None = Depends(token_cookie),
    query_token: str | None = Depends(token_query),
) -> str | None:
    """
    Locate a raw token on the request.

    Precedence: Authorization header, x-access-token header, `token`
    cookie, `token` query parameter. First one found wins.
    """
    if credentials is not None:
        return credentials.credentials
    return header_token or cookie_token or query_token


def require_auth(
    token: str | None = Depends(extract_token),
    settings: Settings = Depends(get_settings_dep),
) -> TokenIdentity:
    """
    Enforce authentication.

    If attached to a route, requests without a token or with an
    invalid/expired one are rejected with 401 before the handler runs.

    Returns:
        The identity decoded from the token.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="A token is required for authentication",
        )

    payload = decode_access_token(settings, token)
    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Token",
        )

    return TokenIdentity(user_id=str(user_id), email=payload.get("email"))
