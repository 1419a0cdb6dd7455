"""
services/tenant_service.py
--------------------------
Business logic for tenant management.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique domains)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)

The tenants table itself is not tenant scoped; it is the partition key.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import ConflictError
from backoffice.core.logging import get_logger
from backoffice.models.tenant import Tenant
from backoffice.schemas.tenant import TenantCreate

logger = get_logger(__name__)


def _domain_taken(domain: str) -> ConflictError:
    return ConflictError(
        f"Tenant domain '{domain}' is already registered",
        [{"field": "domain", "message": "Must be unique", "type": "unique"}],
    )


class TenantService:

    @staticmethod
    async def create_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
        """
        Create a new tenant.
        Raises ConflictError if a tenant with the same domain already exists.
        """
        if await TenantService.get_tenant_by_domain(db, data.domain) is not None:
            raise _domain_taken(data.domain)

        tenant = Tenant(**data.model_dump())
        db.add(tenant)
        try:
            await db.flush()  # Trigger DB constraints before commit
            await db.refresh(tenant)
        except IntegrityError:
            # Lost a race with a concurrent onboarding of the same domain
            await db.rollback()
            raise _domain_taken(data.domain) from None

        logger.info("Tenant created", tenant_id=str(tenant.id), domain=tenant.domain)
        return tenant

    @staticmethod
    async def get_tenant_by_id(db: AsyncSession, tenant_id: uuid.UUID) -> Tenant | None:
        result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_tenant_by_domain(db: AsyncSession, domain: str) -> Tenant | None:
        result = await db.execute(
            select(Tenant).where(Tenant.domain == domain.strip().lower())
        )
        return result.scalar_one_or_none()
