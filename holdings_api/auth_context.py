"""
holdings_api/auth_context.py

Authentication gate for every protected endpoint.

Identity is delegated to an external provider that issues HS256 JWTs signed
with the shared SECRET_KEY. The token's "sub" claim is the opaque user id that
scopes every query; nothing in a request body or query string can override it.

Contains:
- AuthContext: immutable caller identity
- verify_token: JWT verification
- require_auth_context: FastAPI dependency, 401 before any validation or persistence
- create_access_token: token minting used by the dev-only token endpoint and tests
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from holdings_api import config

# auto_error=False so a missing header is reported as 401 (not 403)
security = HTTPBearer(auto_error=False)


# ---------------------------------------------------------
# JWT Token Verification
# ---------------------------------------------------------
def verify_token(token: str) -> dict:
    """
    Verify a JWT access token and return its decoded payload.

    Raises:
        HTTPException(401): If token is expired or invalid
    """
    try:
        return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


# ---------------------------------------------------------
# AuthContext
# ---------------------------------------------------------
class AuthContext(BaseModel):
    """
    Caller identity derived from a verified token.
    This is the ONLY source of truth for the owner id in protected endpoints.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None


def require_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """
    Auth dependency for every resource and analytics route.

    Usage:
        @router.get("")
        def list_rows(ctx: AuthContext = Depends(require_auth_context)):
            # Use ctx.user_id for owner scoping
            ...

    Raises:
        HTTPException(401): Missing header, invalid/expired token, or no subject
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)
    user_id = payload.get("sub")

    if not user_id:
        print("[AUTH] Missing sub in token payload")
        raise HTTPException(status_code=401, detail="Invalid token")

    ctx = AuthContext(user_id=str(user_id), email=payload.get("email"))

    if config.IS_DEV:
        print(f"[AUTH] Authenticated: user_id={ctx.user_id}")

    return ctx
