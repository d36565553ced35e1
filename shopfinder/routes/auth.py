"""Shopkeeper authentication routes."""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from shopfinder.core.auth import login_with_passkey

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Login request model."""

    passkey: str


class TokenResponse(BaseModel):
    """Token response model."""

    access_token: str
    token_type: str = "bearer"
    shop_name: str


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest) -> TokenResponse:
    """
    Exchange a 16 character shopkeeper passkey for a JWT.

    Args:
        credentials: The passkey exactly as typed

    Returns:
        JWT access token scoped to the passkey's shop

    Raises:
        HTTPException: 400 for a wrong-length passkey, 401 for an unknown one
    """
    shop_name, token = login_with_passkey(credentials.passkey)
    return TokenResponse(access_token=token, shop_name=shop_name)


__all__ = ["router"]
