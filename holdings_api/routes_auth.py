"""
holdings_api/routes_auth.py

Identity endpoints.

Sign-in itself belongs to the external identity provider. The only thing
this service offers is a DEV-only token mint so the dashboard and local
scripts can act as a given user; it answers 403 outside dev.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from holdings_api import config
from holdings_api.auth_context import AuthContext, create_access_token, require_auth_context

router = APIRouter(prefix="/auth", tags=["auth"])


class DevTokenRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str


@router.post("/dev-token", response_model=TokenResponse)
def issue_dev_token(req: DevTokenRequest) -> TokenResponse:
    """Mint an access token for any user id (local development only)."""
    if not config.IS_DEV:
        raise HTTPException(status_code=403, detail="Dev endpoints only available in dev")

    claims = {"sub": req.user_id}
    if req.email:
        claims["email"] = req.email

    print(f"[AUTH] Issued dev token for user_id={req.user_id}")
    return TokenResponse(access_token=create_access_token(claims), user_id=req.user_id)


@router.get("/me")
def whoami(ctx: AuthContext = Depends(require_auth_context)) -> Dict[str, Optional[str]]:
    return {"userId": ctx.user_id, "email": ctx.email}
