from __future__ import annotations

import datetime as dt
import hmac
import logging
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shopfinder.core.config import get_settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

PASSKEY_LENGTH = 16
_ALGORITHM = "HS256"


def verify_passkey(passkey: str) -> Optional[str]:
    """
    Look up the shop a shopkeeper passkey belongs to.

    Args:
        passkey: Passkey exactly as typed (no trimming)

    Returns:
        The shop name, or None when the passkey is the wrong length or unknown
    """
    if len(passkey) != PASSKEY_LENGTH:
        return None

    shop_name = None
    for known, shop in get_settings().shopkeeper_passkeys.items():
        if hmac.compare_digest(known.encode("utf-8"), passkey.encode("utf-8")):
            shop_name = shop
    return shop_name


def create_shopkeeper_token(shop_name: str) -> str:
    """
    Create a JWT that lets the holder edit ``shop_name``.

    Note: only call this after verify_passkey() succeeded.
    """
    settings = get_settings()
    payload = {
        "sub": shop_name,
        "role": "shopkeeper",
        "exp": dt.datetime.now(dt.timezone.utc) + dt.timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def login_with_passkey(passkey: str) -> tuple[str, str]:
    """
    Verify a passkey and issue a token for its shop.

    Returns:
        (shop_name, token)

    Raises:
        HTTPException: 400 when the passkey has the wrong length, 401 when unknown
    """
    if len(passkey) != PASSKEY_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Passkey must be {PASSKEY_LENGTH} characters.",
        )

    shop_name = verify_passkey(passkey)
    if shop_name is None:
        logger.warning("Rejected shopkeeper login with unknown passkey")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid passkey.")

    logger.info("Shopkeeper login for %s", shop_name)
    return shop_name, create_shopkeeper_token(shop_name)


async def require_shopkeeper(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Verify the bearer token and return the shop it was issued for.

    Raises:
        HTTPException: If the token is missing, invalid or not a shopkeeper token
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    try:
        payload = jwt.decode(credentials.credentials, get_settings().secret_key, algorithms=[_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    if payload.get("role") != "shopkeeper" or not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return payload["sub"]


__all__ = [
    "PASSKEY_LENGTH",
    "create_shopkeeper_token",
    "login_with_passkey",
    "require_shopkeeper",
    "verify_passkey",
]
