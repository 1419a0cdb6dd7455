"""
dependencies.py
---------------
FastAPI dependency injection functions for the request's tenant context.

Flow:
  1. HTTPBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates and parses the JWT (no DB round-trip).
  3. get_tenant_id normalises the token's tenant_id claim to a uuid.UUID,
     verifies the tenant still exists and binds it to the log context.
  4. get_current_tenant returns the full Tenant row for tenant endpoints.

The tenant_id embedded in the JWT is the only tenant context the routes
ever see; nothing in a request body or query string can change it.
"""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.logging import bind_request_context, get_logger
from backoffice.core.security import decode_access_token
from backoffice.db.session import get_db
from backoffice.models.tenant import Tenant
from backoffice.services.tenant_scoping import normalize_tenant_id
from backoffice.services.tenant_service import TenantService

logger = get_logger(__name__)

# auto_error=False so a missing header is a 401, same as a bad token
bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_tenant(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Tenant:
    """
    Decode the JWT, then load and return the caller's Tenant.

    Raises:
        401 if the token is missing, invalid, expired or names a tenant that
            no longer exists.
        InvalidTenantError (400) if the token has no tenant_id claim or the
            claim is not a tenant identifier.
    """
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _CREDENTIALS_EXCEPTION

    tenant_id = normalize_tenant_id(payload.get("tenant_id"))

    # Always re-verify against DB so deleted tenants are rejected
    tenant = await TenantService.get_tenant_by_id(db, tenant_id)
    if tenant is None:
        logger.warning("Tenant from valid JWT not found in DB", tenant_id=str(tenant_id))
        raise _CREDENTIALS_EXCEPTION

    bind_request_context(tenant_id=str(tenant_id), principal=payload.get("sub"))
    return tenant


async def get_tenant_id(
    tenant: Annotated[Tenant, Depends(get_current_tenant)],
) -> uuid.UUID:
    return tenant.id
