"""
services/tenant_scoping.py
--------------------------
Tenant Scoping Layer.

Critical security invariant:
  Every read or write against a tenant-scoped table goes through the
  functions in this module. Each one runs scope_filter() first, so the
  resulting statement always carries ``tenant_id = :tenant``. Nothing
  else in the codebase builds a raw filter for a TenantScopedMixin model.

Tenant identifiers are normalised to uuid.UUID here. The request boundary
(dependencies.get_tenant_id) already hands over a UUID; strings are still
accepted so scripts and tests can pass the textual form.
"""

import uuid
from typing import Any, Mapping, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import InvalidTenantError
from backoffice.db.base import TenantScopedMixin

TenantId = uuid.UUID | str
ModelT = TypeVar("ModelT", bound=TenantScopedMixin)


def is_valid_tenant_id(value: Any) -> bool:
    """Structural check only: a UUID or its string form. Existence is not checked."""
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        uuid.UUID(value.strip())
    except ValueError:
        return False
    return True


def normalize_tenant_id(value: Any) -> uuid.UUID:
    """Return the canonical uuid.UUID for a tenant id, or raise InvalidTenantError."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidTenantError("Tenant ID is required")
    if not is_valid_tenant_id(value):
        raise InvalidTenantError(f"Malformed tenant ID: {value!r}")
    return value if isinstance(value, uuid.UUID) else uuid.UUID(value.strip())


def scope_filter(filter: Mapping[str, Any] | None, tenant_id: TenantId) -> dict:
    """
    Return a new filter equal to ``filter`` plus ``tenant_id == <tenant>``.

    The input mapping is never mutated. A tenant_id key already present in
    ``filter`` is overwritten by the trusted value.
    """
    scoped = dict(filter or {})
    scoped["tenant_id"] = normalize_tenant_id(tenant_id)
    return scoped


def _order_clauses(model: Type[TenantScopedMixin], order_by: Sequence[str]) -> list:
    clauses = []
    for name in order_by:
        column = getattr(model, name.lstrip("-"))
        clauses.append(column.desc() if name.startswith("-") else column.asc())
    clauses.append(model.id.asc())  # stable tie-break
    return clauses


async def find_scoped(
    db: AsyncSession,
    model: Type[ModelT],
    filter: Mapping[str, Any] | None,
    tenant_id: TenantId,
    *,
    order_by: Sequence[str] = ("created_at",),
    skip: int = 0,
    limit: int | None = None,
) -> list[ModelT]:
    stmt = (
        select(model)
        .filter_by(**scope_filter(filter, tenant_id))
        .order_by(*_order_clauses(model, order_by))
        .offset(skip)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def find_one_scoped(
    db: AsyncSession,
    model: Type[ModelT],
    filter: Mapping[str, Any] | None,
    tenant_id: TenantId,
) -> ModelT | None:
    result = await db.execute(
        select(model).filter_by(**scope_filter(filter, tenant_id)).limit(1)
    )
    return result.scalar_one_or_none()


async def count_scoped(
    db: AsyncSession,
    model: Type[TenantScopedMixin],
    filter: Mapping[str, Any] | None,
    tenant_id: TenantId,
) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(model)
        .filter_by(**scope_filter(filter, tenant_id))
    )
    return result.scalar_one()


async def create_scoped(
    db: AsyncSession,
    model: Type[ModelT],
    data: Mapping[str, Any],
    tenant_id: TenantId,
) -> ModelT:
    """
    Insert a new row owned by ``tenant_id``.

    Any tenant_id in ``data`` is replaced: only the server's tenant context
    may assign ownership. Flushes so database constraints fire here.
    """
    values = dict(data)
    values["tenant_id"] = normalize_tenant_id(tenant_id)
    record = model(**values)
    db.add(record)
    await db.flush()
    return record
