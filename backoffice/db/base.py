"""
db/base.py
----------
Declarative base and shared mixins.

TimestampMixin:     Adds created_at / updated_at columns to any model.
TenantScopedMixin:  UUID primary key plus the owning tenant_id. Every
                    business record inherits it; the tenant guard in
                    db/guard.py refuses ORM queries on these tables that
                    carry no tenant_id clause.

UUIDs are preferable over integer sequences in multi-tenant systems
because they prevent tenant enumeration attacks.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Stable constraint names: ConflictError reporting matches on them.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Adds created_at and updated_at timestamps (UTC)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class TenantScopedMixin(TimestampMixin):
    """Primary key + owning tenant for every tenant-partitioned table."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


# Columns the server owns; never accepted from request payloads.
SYSTEM_FIELDS = frozenset({"id", "tenant_id", "created_at", "updated_at"})
