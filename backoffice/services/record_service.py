"""
services/record_service.py
--------------------------
Generic CRUD for any registered tenant-scoped entity.

Service layer is responsible for:
  - Validating payloads against the entity schema before any write
  - Resolving records by (id, tenant_id) through the scoping layer
  - Translating storage constraint failures into ConflictError
  - Returning ORM objects to the route layer (never HTTP responses)

A record id that is malformed, absent, or owned by another tenant is
reported with the same NotFoundError so callers cannot test for other
tenants' data.
"""

import uuid
from typing import Any, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
    field_errors_from_pydantic,
)
from backoffice.core.logging import get_logger
from backoffice.db.base import SYSTEM_FIELDS, utcnow
from backoffice.registry import EntitySchema
from backoffice.services.tenant_scoping import (
    TenantId,
    count_scoped,
    create_scoped,
    find_one_scoped,
    find_scoped,
    normalize_tenant_id,
)

logger = get_logger(__name__)

_SYSTEM_KEYS = SYSTEM_FIELDS | {"tenantId", "createdAt", "updatedAt"}


def _accepted_keys(schema: type[BaseModel]) -> set[str]:
    keys = set()
    for name, info in schema.model_fields.items():
        keys.add(name)
        if info.alias:
            keys.add(info.alias)
    return keys


class RecordService:

    def __init__(self, entity: EntitySchema) -> None:
        self.entity = entity

    # ── Validation helpers ───────────────────────────────────────────────────

    def _prepare(self, payload: Any, schema: type[BaseModel]) -> dict[str, Any]:
        """Drop server-owned keys and apply the entity's unknown-field policy."""
        if not isinstance(payload, Mapping):
            raise ValidationError(
                f"{self.entity.label} payload must be a JSON object",
                [{"field": None, "message": "Expected an object", "type": "dict_type"}],
            )
        cleaned = {k: v for k, v in payload.items() if k not in _SYSTEM_KEYS}
        if self.entity.unknown_fields == "ignore":
            accepted = _accepted_keys(schema)
            cleaned = {k: v for k, v in cleaned.items() if k in accepted}
        return cleaned

    def _validate(self, schema: type[BaseModel], data: Mapping[str, Any]) -> BaseModel:
        try:
            return schema.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"{self.entity.label} failed validation",
                field_errors_from_pydantic(exc.errors()),
            ) from None

    def _parse_filters(self, filters: Mapping[str, Any] | None) -> dict[str, Any]:
        if not filters:
            return {}
        parsed = self._validate(self.entity.filter_schema, filters)
        return parsed.model_dump(exclude_none=True)

    # ── Storage helpers ──────────────────────────────────────────────────────

    def _match_unique_key(self, exc: IntegrityError) -> tuple[str, ...] | None:
        # PostgreSQL names the constraint; SQLite lists table.column pairs.
        message = str(exc.orig)
        table = self.entity.model.__tablename__
        for key in self.entity.unique_keys:
            constraint = f"uq_{table}_tenant_id_{'_'.join(key)}"
            columns = ", ".join(f"{table}.{c}" for c in ("tenant_id",) + key)
            if constraint in message or columns in message:
                return key
        return None

    async def _conflict(
        self, db: AsyncSession, exc: IntegrityError, tenant_id: uuid.UUID
    ) -> ConflictError:
        """Roll back the failed write and describe it as a ConflictError."""
        await db.rollback()
        key = self._match_unique_key(exc)
        logger.info(
            "Unique constraint violated",
            entity=self.entity.name,
            tenant_id=str(tenant_id),
            fields=list(key or ()),
        )
        if key is None:
            return ConflictError(f"{self.entity.label} conflicts with an existing record")
        return ConflictError(
            f"{self.entity.label} with this {', '.join(key)} already exists",
            [
                {"field": to_camel(name), "message": "Must be unique within the tenant", "type": "unique"}
                for name in key
            ],
        )

    # ── Operations ───────────────────────────────────────────────────────────

    async def list_records(
        self,
        db: AsyncSession,
        tenant_id: TenantId,
        filters: Mapping[str, Any] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[int, list[Any]]:
        """
        Records of one tenant matching ``filters``, in the entity's order.

        Returns:
            (total_count, page_of_records)
        """
        criteria = self._parse_filters(filters)
        model = self.entity.model
        total = await count_scoped(db, model, criteria, tenant_id)
        records = await find_scoped(
            db,
            model,
            criteria,
            tenant_id,
            order_by=self.entity.order_by,
            skip=skip,
            limit=limit,
        )
        return total, records

    async def get_record(self, db: AsyncSession, tenant_id: TenantId, record_id: Any) -> Any:
        try:
            key = record_id if isinstance(record_id, uuid.UUID) else uuid.UUID(str(record_id))
        except ValueError:
            raise NotFoundError(f"{self.entity.label} not found") from None

        record = await find_one_scoped(db, self.entity.model, {"id": key}, tenant_id)
        if record is None:
            raise NotFoundError(f"{self.entity.label} not found")
        return record

    async def create_record(self, db: AsyncSession, tenant_id: TenantId, payload: Any) -> Any:
        tenant = normalize_tenant_id(tenant_id)
        data = self._validate(
            self.entity.create_schema,
            self._prepare(payload, self.entity.create_schema),
        ).model_dump()

        try:
            record = await create_scoped(db, self.entity.model, data, tenant)
        except IntegrityError as exc:
            raise await self._conflict(db, exc, tenant) from None
        await db.refresh(record)

        logger.info(
            "Record created",
            entity=self.entity.name,
            record_id=str(record.id),
            tenant_id=str(tenant),
        )
        return record

    async def update_record(
        self,
        db: AsyncSession,
        tenant_id: TenantId,
        record_id: Any,
        payload: Any,
    ) -> Any:
        """
        Partial update. Keys absent from ``payload`` keep their value; id and
        tenant_id never change. updated_at is refreshed even when nothing else
        is.
        """
        tenant = normalize_tenant_id(tenant_id)
        changes = self._validate(
            self.entity.update_schema,
            self._prepare(payload, self.entity.update_schema),
        ).model_dump(exclude_unset=True)

        record = await self.get_record(db, tenant, record_id)

        # The merged record must still satisfy the create schema
        # (required fields present, cross-field rules hold).
        current = {
            name: getattr(record, name)
            for name in self.entity.create_schema.model_fields
        }
        self._validate(self.entity.create_schema, {**current, **changes})

        for name, value in changes.items():
            setattr(record, name, value)
        record.updated_at = utcnow()

        try:
            await db.flush()
        except IntegrityError as exc:
            raise await self._conflict(db, exc, tenant) from None
        await db.refresh(record)

        logger.info(
            "Record updated",
            entity=self.entity.name,
            record_id=str(record.id),
            tenant_id=str(tenant),
            fields=sorted(changes),
        )
        return record

    async def delete_record(self, db: AsyncSession, tenant_id: TenantId, record_id: Any) -> dict:
        tenant = normalize_tenant_id(tenant_id)
        record = await self.get_record(db, tenant, record_id)
        deleted_id = record.id
        await db.delete(record)
        await db.flush()

        logger.info(
            "Record deleted",
            entity=self.entity.name,
            record_id=str(deleted_id),
            tenant_id=str(tenant),
        )
        return {"message": "Deleted", "id": deleted_id}
