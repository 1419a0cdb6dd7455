"""
api/routes/tenants.py
---------------------
Tenant management endpoints.

POST /tenants     — Public endpoint to onboard a new company/tenant.
GET  /tenants/me  — The tenant named by the caller's token, with its
                    current financial year.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.session import get_db
from backoffice.dependencies import get_current_tenant
from backoffice.models.tenant import Tenant
from backoffice.schemas.common import ErrorResponse
from backoffice.schemas.tenant import TenantCreate, TenantDetail, TenantRead
from backoffice.services.tenant_service import TenantService

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a new tenant (company)",
    responses={409: {"model": ErrorResponse, "description": "Domain already registered"}},
)
async def create_tenant(
    body: TenantCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    """
    Public endpoint — no authentication required.
    In production you may want to restrict this to an internal
    admin portal or require an invite token.
    """
    tenant = await TenantService.create_tenant(db, body)
    return TenantRead.model_validate(tenant)


@router.get(
    "/me",
    response_model=TenantDetail,
    summary="Current tenant settings",
)
async def read_current_tenant(
    tenant: Annotated[Tenant, Depends(get_current_tenant)],
) -> TenantDetail:
    return TenantDetail.model_validate(tenant)
