"""
core/security.py
----------------
JWT utilities for the tenant context carried by every request.

Design decisions:
  - The token's tenant_id claim is the only trusted origin of tenant
    assignment; request bodies can never move a record between tenants.
  - sub identifies the calling principal (user or service) for logs only.
  - Tokens are signed with HS256; swap to RS256 for multi-service setups.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from backoffice.core.config import settings


def create_access_token(
    subject: str,
    tenant_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint a JWT access token.

    Args:
        subject: Principal identifier (stored in 'sub' claim).
        tenant_id: Tenant UUID — every scoped query uses this value.
        expires_delta: Optional custom expiry; defaults to settings value.

    Returns:
        Signed JWT string.
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload: Dict[str, Any] = {
        "sub": subject,
        "tenant_id": str(tenant_id),
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered with.

    Returns:
        Raw payload dict.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
