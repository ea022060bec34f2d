# FILE: voyage/auth.py
"""
Bearer token verification

Token format: {owner_id}.{expires_timestamp}.{hmac_sha256_hex}
Tokens are issued by the user service; this module only needs the shared
secret to verify them.
"""
import hashlib
import hmac
import logging
import time
from typing import Optional

from fastapi import Header, HTTPException

from voyage.config import get_settings

logger = logging.getLogger(__name__)


def _sign(owner_id: str, expires: int, secret: str) -> str:
    msg = f"{owner_id}.{expires}"
    return hmac.new(secret.encode(), msg.encode(), hashlib.sha256).hexdigest()


def issue_token(owner_id: str, ttl_seconds: Optional[int] = None, secret: Optional[str] = None) -> str:
    """Generate a signed token for an owner with expiry."""
    settings = get_settings()
    if not owner_id or "." in owner_id:
        raise ValueError("owner_id must be non-empty and must not contain '.'")
    if ttl_seconds is None:
        ttl_seconds = settings.auth_token_ttl_hours * 3600
    expires = int(time.time()) + ttl_seconds
    sig = _sign(owner_id, expires, secret or settings.auth_secret)
    return f"{owner_id}.{expires}.{sig}"


def verify_token(token: str, secret: Optional[str] = None) -> Optional[str]:
    """Return the owner id for a valid, unexpired token, otherwise None."""
    try:
        owner_id, expires_str, sig = token.split(".")
        expires = int(expires_str)
    except (AttributeError, ValueError):
        return None

    if not owner_id or time.time() > expires:
        return None

    expected = _sign(owner_id, expires, secret or get_settings().auth_secret)
    if not hmac.compare_digest(sig.encode(), expected.encode()):
        return None
    return owner_id


async def get_current_owner(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency resolving the authenticated owner id"""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authentication required")

    owner_id = verify_token(authorization[len("Bearer "):].strip())
    if owner_id is None:
        logger.warning("Rejected invalid or expired bearer token")
        raise HTTPException(status_code=401, detail="Authentication required")

    return owner_id
